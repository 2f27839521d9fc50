# Tool definition for step 1 of the timesheet workflow
schema = {
    "type": "function",
    "function": {
        "name": "list_projects",
        "description": "STEP 1 of the timesheet workflow: list projects to pick the one the work belongs to.",
        "parameters": {
            "type": "object",
            "properties": {
                "status": {"type": "string", "enum": ["active", "archived"], "description": "Filter by project status"},
                "company_id": {"type": "string", "description": "Filter by company ID"},
                "limit": {"type": "integer", "description": "Number of projects to return (1-200)", "minimum": 1, "maximum": 200, "default": 30}
            },
            "required": []
        }
    }
}
