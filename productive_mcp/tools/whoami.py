# Tool definition for the current user context
schema = {
    "type": "function",
    "function": {
        "name": "whoami",
        "description": "Get the current user context. Shows which person ID 'me' refers to.",
        "parameters": {"type": "object", "properties": {}, "required": []}
    }
}
