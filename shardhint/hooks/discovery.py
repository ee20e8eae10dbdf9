"""
Execution hook discovery.

Assembles the ordered list of observers at process startup from three
sources, in this order:

1. instances registered explicitly with ``register()``
2. ``"module:Class"`` import paths, usually taken from configuration
3. installed packages declaring entry points in the
   ``shardhint.execution_hooks`` group (sorted by entry point name)

Entry points that fail to load are skipped and recorded; explicit
registrations and import paths fail loudly.
"""

from importlib import import_module
from importlib.metadata import entry_points
from typing import List, Tuple
import logging

from .base import ExecutionHook

logger = logging.getLogger(__name__)

HOOK_ENTRY_POINT_GROUP = "shardhint.execution_hooks"


def load_hook(path: str) -> ExecutionHook:
    """
    Import and instantiate an execution hook from a ``module:Class`` path.

    Args:
        path: Import path such as ``mypackage.hooks:TracingHook``

    Returns:
        Hook instance

    Raises:
        ValueError: If the path is malformed or does not name an ExecutionHook
        ImportError: If the module cannot be imported
    """
    module_name, _, attr_name = path.partition(":")
    if not module_name or not attr_name:
        raise ValueError(f"Hook path must look like 'module:Class', got '{path}'")

    module = import_module(module_name)
    try:
        target = getattr(module, attr_name)
    except AttributeError:
        raise ValueError(f"Module '{module_name}' has no attribute '{attr_name}'")

    return _instantiate(target, path)


def _instantiate(target, source: str) -> ExecutionHook:
    hook = target() if isinstance(target, type) else target
    if not isinstance(hook, ExecutionHook):
        raise ValueError(f"'{source}' does not provide an ExecutionHook")
    return hook


class HookDiscovery:
    """
    Collects execution hooks from explicit registrations, import paths
    and entry points.
    """

    def __init__(
        self,
        hook_paths: List[str] = None,
        use_entry_points: bool = False,
        group: str = HOOK_ENTRY_POINT_GROUP
    ):
        """
        Initialize the discovery.

        Args:
            hook_paths: ``module:Class`` paths to load
            use_entry_points: Whether to scan installed entry points
            group: Entry point group to scan
        """
        self.hook_paths = list(hook_paths or [])
        self.use_entry_points = use_entry_points
        self.group = group
        self.registered: List[ExecutionHook] = []
        self.failures: List[Tuple[str, str]] = []

    def register(self, hook: ExecutionHook) -> None:
        """Register a hook instance explicitly."""
        if not isinstance(hook, ExecutionHook):
            raise ValueError(f"{hook!r} is not an ExecutionHook")
        self.registered.append(hook)
        logger.info(f"Registered execution hook {type(hook).__name__}")

    def discover_from_entry_points(self) -> List[ExecutionHook]:
        """
        Load hooks declared as entry points.

        Returns:
            Hooks in entry point name order
        """
        hooks = []
        for ep in sorted(entry_points(group=self.group), key=lambda ep: ep.name):
            try:
                hooks.append(_instantiate(ep.load(), ep.value))
            except Exception as e:
                self.failures.append((ep.name, str(e)))
                logger.warning(f"Execution hook entry point '{ep.name}' skipped: {e}")
                continue
            logger.info(f"Discovered execution hook '{ep.name}' ({ep.value})")
        return hooks

    def discover(self) -> Tuple[ExecutionHook, ...]:
        """
        Build the ordered, immutable list of hooks.

        Returns:
            Tuple of hooks in notification order
        """
        hooks = list(self.registered)
        hooks.extend(load_hook(path) for path in self.hook_paths)

        if self.use_entry_points:
            hooks.extend(self.discover_from_entry_points())

        logger.info(f"Discovered {len(hooks)} execution hooks")
        return tuple(hooks)
