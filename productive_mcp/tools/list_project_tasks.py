# Tool definition for step 4 of the timesheet workflow
schema = {
    "type": "function",
    "function": {
        "name": "list_project_tasks",
        "description": (
            "STEP 4 (optional, recommended) of the timesheet workflow: list the tasks of a "
            "project to link a time entry to. Use 'me' as assignee_id for the configured user."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "project_id": {"type": "string", "description": "The ID of the project"},
                "assignee_id": {"type": "string", "description": "Filter by assignee ID, or 'me'"},
                "status": {"type": "string", "enum": ["open", "closed"], "description": "Filter by task status"},
                "limit": {"type": "integer", "description": "Number of tasks to return (1-200)", "minimum": 1, "maximum": 200, "default": 30}
            },
            "required": ["project_id"]
        }
    }
}
