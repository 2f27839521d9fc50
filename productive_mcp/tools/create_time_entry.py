# Tool definition for the final timesheet step
schema = {
    "type": "function",
    "function": {
        "name": "create_time_entry",
        "description": (
            "STEP 5 (FINAL) of the timesheet workflow: create a time entry. COMPLETE WORKFLOW: "
            "1) list_projects → 2) list_project_deals → 3) list_deal_services → "
            "4) list_project_tasks (recommended) → 5) create_time_entry. You MUST provide a "
            "service_id from the hierarchy and a detailed note (minimum 10 characters). "
            "The first call returns a preview; call again with the same parameters and "
            "confirm=true only after the user approves it. Use 'me' as person_id for the "
            "configured user."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "date": {"type": "string", "description": "Date for the time entry: 'today', 'yesterday', or YYYY-MM-DD"},
                "time": {"type": "string", "description": "Duration like '2h', '120m', '2.5h', or '2.5' (hours)"},
                "person_id": {"type": "string", "description": "ID of the person logging time, or 'me'"},
                "service_id": {"type": "string", "description": "ID of the service from list_deal_services"},
                "task_id": {"type": "string", "description": "ID of the task being worked on (recommended)"},
                "note": {"type": "string", "description": "Detailed description of the work performed (minimum 10 characters)", "minLength": 10},
                "billable_time": {"type": "string", "description": "Billable duration, same format as time (optional)"},
                "confirm": {"type": "boolean", "description": "Set to true to actually create the entry. Call without it first to see the preview.", "default": False}
            },
            "required": ["date", "time", "person_id", "service_id", "note"]
        }
    }
}
