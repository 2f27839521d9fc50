# Tool definition for step 3 of the timesheet workflow
schema = {
    "type": "function",
    "function": {
        "name": "list_deal_services",
        "description": (
            "STEP 3 of the timesheet workflow: get the services of a deal/budget. "
            "Afterwards, optionally use list_project_tasks to find a task to link."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "deal_id": {"type": "string", "description": "The ID of the deal/budget"},
                "limit": {"type": "integer", "description": "Number of services to return (1-200)", "minimum": 1, "maximum": 200, "default": 30}
            },
            "required": ["deal_id"]
        }
    }
}
