# Guided prompt: what to do at one step of the timesheet workflow
schema = {
    "type": "function",
    "function": {
        "name": "timesheet_step",
        "description": (
            "Get the recommended next tool call for a timesheet workflow step, given the IDs "
            "selected so far. Steps: project, budget, service, task, create."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "step": {"type": "string", "enum": ["project", "budget", "service", "task", "create"], "description": "The workflow step to get help with"},
                "project_id": {"type": "string", "description": "Selected project ID"},
                "deal_id": {"type": "string", "description": "Selected deal/budget ID"},
                "service_id": {"type": "string", "description": "Selected service ID"},
                "task_id": {"type": "string", "description": "Selected task ID"}
            },
            "required": ["step"]
        }
    }
}
