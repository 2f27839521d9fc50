# Guided prompt: the complete timesheet workflow
schema = {
    "type": "function",
    "function": {
        "name": "timesheet_entry",
        "description": (
            "Get step-by-step guidance for logging time: Project → Deal/Budget → Service → "
            "Task → Time Entry. Call this when the user wants to log time and you do not yet "
            "know the project, service or task IDs."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "project_name": {"type": "string", "description": "Project name the user mentioned (optional)"},
                "date": {"type": "string", "description": "'today', 'yesterday', or YYYY-MM-DD (optional)"},
                "time": {"type": "string", "description": "Duration like '2h', '120m', '2.5h' (optional)"},
                "work_description": {"type": "string", "description": "Brief description of the work (optional)"}
            },
            "required": []
        }
    }
}
