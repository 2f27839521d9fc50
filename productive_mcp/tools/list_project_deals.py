# Tool definition for step 2 of the timesheet workflow
schema = {
    "type": "function",
    "function": {
        "name": "list_project_deals",
        "description": (
            "STEP 2 of the timesheet workflow: get the deals/budgets of a project. "
            "Hierarchy: Project → Deal/Budget → Service → Task → Time Entry."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "project_id": {"type": "string", "description": "The ID of the project"},
                "budget_type": {"type": "integer", "description": "Filter by budget type: 1 = deal, 2 = budget", "enum": [1, 2]},
                "limit": {"type": "integer", "description": "Number of deals/budgets to return (1-200)", "minimum": 1, "maximum": 200, "default": 30}
            },
            "required": ["project_id"]
        }
    }
}
