import os, json, sys, requests, openai, readline
from dotenv import load_dotenv
from productive_mcp.tools import schemas as functions

# Load environment variables from .env file
load_dotenv()

MCP_URL = os.getenv("MCP_URL", "http://localhost:8000")
PROMPTS = {"timesheet_entry", "timesheet_step"}
AFFIRMATIVE = {'yes', 'y', 'confirm', 'ok', 'proceed', 'yup', 'yeah', 'sure', 'go ahead'}
NEGATIVE = {'no', 'n', 'cancel', 'abort', 'stop'}

SYSTEM_PROMPT = (
    "You are an assistant that logs time to Productive.io. Time entries follow a strict "
    "hierarchy: Project → Deal/Budget → Service → Task (optional) → Time Entry. Walk the "
    "user through it with the tools, one step at a time. When users mention 'today' or "
    "'yesterday', pass those words as the date. When they talk about themselves, use 'me' "
    "as person_id. Always write a detailed note describing the work."
)

# ---------------- conversation state -----------------

messages = [{"role": "system", "content": SYSTEM_PROMPT}]
client = None


def endpoint_for(name: str) -> str:
    section = "prompts" if name in PROMPTS else "tools"
    return f"{MCP_URL}/{section}/{name}"


def call_tool(name: str, args: dict) -> dict:
    """POST a tool call to the MCP server; errors come back as a dict too."""
    r = requests.post(endpoint_for(name), json=args, timeout=60)
    if r.ok:
        return r.json()
    try:
        body = r.json()
    except ValueError:
        body = {"detail": r.text}
    return {"status": "error", "error": body.get("error", "HTTPError"), "detail": body.get("detail", r.text)}


def print_result(title: str, res: dict):
    print("\n" + "="*60)
    print(title)
    print("="*60)
    if res.get("status") == "error":
        print(f"❌ {res.get('error')}: {res.get('detail')}")
    else:
        print(res.get("formatted_output", ""))
    print("="*60)


def confirm_time_entry(args: dict, preview: dict) -> dict:
    """Ask the user about a preview and re-send the same call with confirm=true."""
    print_result("📋 TIME ENTRY CONFIRMATION", preview)
    print("Please confirm this time entry:")
    print("• Type 'yes', 'y', 'confirm' to proceed")
    print("• Type 'no', 'n', 'cancel' to cancel")
    print("• Type corrections (e.g., 'change time to 2h')")
    answer = input("Your response: ").strip().lower()

    if answer in AFFIRMATIVE:
        res = call_tool("create_time_entry", {**args, "confirm": True})
        if res.get("status") == "success":
            print(f"✅ Logged {res['minutes']} min on {res['date']} "
                  f"for person {res['person_id']} (entry #{res['entry_id']})")
        else:
            print_result("❌ TIME ENTRY FAILED", res)
        return res
    if answer in NEGATIVE:
        print("❌ Time entry cancelled.")
        return {"status": "cancelled", "formatted_output": "The user cancelled the time entry."}
    return {"status": "correction", "formatted_output": f"The user asked for a correction: {answer}"}


def handle_tool_call(name: str, args: dict) -> dict:
    print(f"↳ OpenAI called {name} with {args}")
    if name == "create_time_entry":
        args = {k: v for k, v in args.items() if k != "confirm"}
        res = call_tool(name, args)
        if res.get("status") == "preview":
            return confirm_time_entry(args, res)
        print_result("📋 TIME ENTRY", res)
        return res

    res = call_tool(name, args)
    print_result(f"🔎 {name.upper()}", res)
    return res


def chat(user_input: str):
    global client
    if client is None:
        client = openai.OpenAI()

    messages.append({"role": "user", "content": user_input})
    while True:
        resp = client.chat.completions.create(
            model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            messages=messages,
            tools=functions,
            tool_choice="auto"
        )
        msg = resp.choices[0].message
        messages.append(msg)

        if not msg.tool_calls:
            print(msg.content)
            return

        for tool_call in msg.tool_calls:
            args = json.loads(tool_call.function.arguments or "{}")
            res = handle_tool_call(tool_call.function.name, args)
            messages.append({"role": "tool",
                             "tool_call_id": tool_call.id,
                             "content": json.dumps(res)})


def main():
    # Check for OpenAI API key
    if not os.getenv("OPENAI_API_KEY"):
        print("❌ OpenAI API key not found!")
        print("Please set your OpenAI API key in your .env file:")
        print("OPENAI_API_KEY=your-api-key-here")
        sys.exit(1)
    try:
        while True:
            chat(input("You: "))
    except (EOFError, KeyboardInterrupt):
        sys.exit()


if __name__ == "__main__":
    main()
