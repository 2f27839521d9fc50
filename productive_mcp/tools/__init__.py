"""OpenAI function schemas for every tool and prompt the server exposes."""
from importlib import import_module
from pkgutil import iter_modules
from pathlib import Path

schemas = []
by_name = {}

_package_dir = Path(__file__).parent
for mod in iter_modules([str(_package_dir)]):
    if mod.ispkg:
        continue
    module = import_module(f"{__name__}.{mod.name}")
    schema = getattr(module, "schema", None)
    if schema is None:
        continue
    schemas.append(schema)
    by_name[schema["function"]["name"]] = schema
