"""Tool and prompt routers, collected from the modules of this package."""
import logging
from importlib import import_module
from pkgutil import iter_modules
from pathlib import Path

from fastapi import APIRouter

logger = logging.getLogger(__name__)

routers = []

_package_dir = Path(__file__).parent
for mod in iter_modules([str(_package_dir)]):
    if mod.ispkg:
        continue
    module = import_module(f"{__name__}.{mod.name}")
    router = getattr(module, "router", None)
    if isinstance(router, APIRouter):
        logger.debug("Registering %d routes from %s", len(router.routes), mod.name)
        routers.append(router)
