import importlib.util
import itertools
import logging
import sys
from pathlib import Path
from typing import Iterator, Union

logger = logging.getLogger(__name__)


def incrf(start: int = 1) -> Iterator[int]:
    """Endless counter, used for ids that only need to be unique per owner."""
    return itertools.count(start)


def load_module(script_path: Union[str, Path], module_name: str = "module"):
    spec = importlib.util.spec_from_file_location(module_name, str(script_path))
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load module from {script_path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    logger.debug(f"Loaded {module_name} from {script_path}")
    return module
