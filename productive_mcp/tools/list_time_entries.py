# Tool definition for viewing logged time
schema = {
    "type": "function",
    "function": {
        "name": "list_time_entries",
        "description": (
            "View existing time entries from Productive.io, including the service, task and "
            "project each one is linked to, plus the total time across the results. "
            "If PRODUCTIVE_USER_ID is configured, use 'me' as person_id for the current user."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "date": {"type": "string", "description": "Filter by specific date (YYYY-MM-DD format)"},
                "after": {"type": "string", "description": "Filter entries after this date (YYYY-MM-DD format)"},
                "before": {"type": "string", "description": "Filter entries before this date (YYYY-MM-DD format)"},
                "person_id": {"type": "string", "description": "Filter by person ID, or 'me' for the configured user"},
                "project_id": {"type": "string", "description": "Filter by project ID"},
                "task_id": {"type": "string", "description": "Filter by task ID"},
                "service_id": {"type": "string", "description": "Filter by service ID"},
                "limit": {"type": "integer", "description": "Number of time entries to return (1-200)", "minimum": 1, "maximum": 200, "default": 30}
            },
            "required": []
        }
    }
}
