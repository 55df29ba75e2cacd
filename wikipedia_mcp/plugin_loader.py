"""
Dynamic plugin loader for the tool system.

- Discovers plugins from the internal package `wikipedia_mcp.plugins/`, a repository-level
  `tools/` directory and any directories configured through WIKIPEDIA_MCP_TOOLS_DIR
- Validates plugin definitions (function-style tools) using jsonschema
- Builds TOOL_SCHEMAS and TOOL_FUNCTIONS for the server
- Exposes a PluginManager for advanced usage and testing

Plugin contract (any Python module):
- Must define TOOL_SCHEMA: dict with keys {"type": "function", "function": {"name": str, "description": str, "parameters": object-schema}}
- Must provide an implementation, one of:
  * attribute TOOL_IMPLEMENTATION: callable (sync or async)
  * a function named the same as TOOL_SCHEMA['function']['name']
  * a function named 'execute'
- Optional: TOOL_VERSION: str, TOOL_AUTHOR: str

At runtime, arguments passed to tool implementations are validated against the
plugin's `parameters` JSON schema before execution. Any validation or runtime
error is raised to the caller, which the caller should catch and format.
"""
from __future__ import annotations

import functools
import importlib.util
import inspect
import logging
import os
import sys
import threading
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Callable, Dict, List, Optional, Tuple

from jsonschema import Draft202012Validator
from jsonschema import validate as jsonschema_validate
from jsonschema.exceptions import SchemaError, ValidationError

from .domain.errors import PluginLoadError
from .infrastructure.config.settings import get_settings


# Minimal JSON Schema to validate the tool definition structure itself
_TOOL_DEFINITION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["type", "function"],
    "properties": {
        "type": {"const": "function"},
        "function": {
            "type": "object",
            "required": ["name", "description", "parameters"],
            "properties": {
                "name": {"type": "string", "minLength": 1},
                "description": {"type": "string", "minLength": 1},
                "parameters": {"type": ["object", "boolean"]},  # allow True for no-arg tools
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

# Alternative argument names callers commonly use -> canonical parameter name
_ARGUMENT_ALIASES: Dict[str, str] = {
    "offset": "start",
    "page_title": "title",
    "q": "query",
    "top_n": "limit",
}


@dataclass(frozen=True)
class PluginRecord:
    name: str
    schema: Dict[str, Any]
    implementation: Callable[..., Any]
    source_path: str
    version: Optional[str] = None
    author: Optional[str] = None


class PluginManager:
    def __init__(self, plugin_paths: Optional[List[str]] = None, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._lock = threading.RLock()
        self._plugin_paths = plugin_paths or []
        self._plugins: List[PluginRecord] = []
        self._schemas: List[Dict[str, Any]] = []
        self._functions: Dict[str, Callable[..., Any]] = {}

    @staticmethod
    def _default_paths() -> List[str]:
        """Compute default plugin search paths.
        - Internal: wikipedia_mcp/plugins/
        - External: tools/ (repository root)
        - Optional: WIKIPEDIA_MCP_TOOLS_DIR (comma or os.pathsep separated)
        """
        here = os.path.dirname(os.path.abspath(__file__))
        repo_root = os.path.dirname(here)  # project root assumed as parent of the package
        paths = [
            os.path.join(here, "plugins"),
            os.path.join(repo_root, "tools"),
        ]
        paths.extend(get_settings().mcp_server.plugin_paths)
        # Deduplicate while preserving order
        seen: set = set()
        out: List[str] = []
        for p in paths:
            ap = os.path.abspath(p)
            if ap not in seen:
                seen.add(ap)
                out.append(ap)
        return out

    def _iter_module_files(self, base_dir: str) -> List[str]:
        files: List[str] = []
        if not os.path.isdir(base_dir):
            return files
        for name in sorted(os.listdir(base_dir)):
            if name.startswith("_"):
                continue
            path = os.path.join(base_dir, name)
            if os.path.isdir(path):
                # support package-style plugins: tools/foo/__init__.py
                init_py = os.path.join(path, "__init__.py")
                if os.path.isfile(init_py):
                    files.append(init_py)
            elif name.endswith(".py"):
                files.append(path)
        return files

    def _import_module_from_path(self, file_path: str, pkg_base: Optional[str]) -> ModuleType:
        if pkg_base:
            # derive module_name like 'wikipedia_mcp.plugins.article_content'
            base_name = os.path.basename(file_path)
            if base_name == "__init__.py":
                rel = os.path.basename(os.path.dirname(file_path))
            else:
                rel = os.path.splitext(base_name)[0]
            module_name = f"{pkg_base}.{rel}"
        else:
            module_name = f"plugin_{abs(hash(file_path))}"
        spec = importlib.util.spec_from_file_location(module_name, file_path)
        if spec is None or spec.loader is None:
            raise PluginLoadError(f"Cannot create import spec for {file_path}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)  # type: ignore[attr-defined]
        return module

    def _validate_tool_schema(self, schema: Dict[str, Any]) -> None:
        try:
            jsonschema_validate(instance=schema, schema=_TOOL_DEFINITION_SCHEMA)
        except ValidationError as e:
            raise PluginLoadError(f"Tool definition failed validation: {e.message}")
        params = schema["function"]["parameters"]
        if isinstance(params, dict):
            try:
                Draft202012Validator.check_schema(params)
            except SchemaError as e:
                raise PluginLoadError(f"Tool parameters are not a valid JSON schema: {e.message}")

    def _wrap_with_arg_validation(self, name: str, schema: Dict[str, Any], func: Callable[..., Any]) -> Callable[..., Any]:
        params_schema = schema.get("function", {}).get("parameters")
        logger = self._logger

        def _apply_aliases(raw_kwargs: Dict[str, Any], param_names: set) -> Dict[str, Any]:
            """Map alias argument names to the canonical ones the function expects."""
            out = dict(raw_kwargs)
            for alias, canonical in _ARGUMENT_ALIASES.items():
                if alias in out and alias not in param_names:
                    value = out.pop(alias)
                    if canonical in param_names and canonical not in out:
                        out[canonical] = value
            return out

        def _prepare(kwargs: Dict[str, Any]) -> Dict[str, Any]:
            # Filter to the function's signature unless it accepts **kwargs; also apply aliases
            params = inspect.signature(func).parameters
            accepts_var_kw = any(p.kind == inspect.Parameter.VAR_KEYWORD for p in params.values())
            if accepts_var_kw:
                filtered = _apply_aliases(kwargs, set(params.keys()))
            else:
                param_names = {n for n, p in params.items() if p.kind in (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)}
                aliased = _apply_aliases(kwargs, param_names)
                filtered = {k: v for k, v in aliased.items() if k in param_names}
                dropped = [k for k in aliased.keys() if k not in param_names]
                if dropped:
                    logger.debug(f"Tool '{name}': dropping unexpected arguments: {dropped}")

            # Remove None values to avoid schema type mismatches (e.g., integer vs null)
            cleaned = {k: v for k, v in filtered.items() if v is not None}

            if isinstance(params_schema, dict) and params_schema:
                try:
                    jsonschema_validate(instance=cleaned, schema=params_schema)
                except ValidationError as e:
                    raise ValueError(f"Arguments for {name} failed schema validation: {e.message}")
            return cleaned

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(**kwargs: Any) -> Any:
                return await func(**_prepare(kwargs))
            wrapper: Callable[..., Any] = async_wrapper
        else:
            @functools.wraps(func)
            def sync_wrapper(**kwargs: Any) -> Any:
                return func(**_prepare(kwargs))
            wrapper = sync_wrapper

        # Preserve nicer debug names
        wrapper.__name__ = f"plugin_{name}"
        wrapper.__doc__ = f"Auto-generated wrapper for plugin tool '{name}' with JSON schema validation."
        return wrapper

    def _extract_plugin(self, module: ModuleType, source_path: str) -> PluginRecord:
        # Locate TOOL_SCHEMA
        schema = getattr(module, "TOOL_SCHEMA", None)
        if not isinstance(schema, dict):
            raise PluginLoadError("Missing or invalid TOOL_SCHEMA (must be a dict)")
        self._validate_tool_schema(schema)
        name = schema["function"]["name"]
        # Find implementation
        impl = getattr(module, "TOOL_IMPLEMENTATION", None)
        if not callable(impl):
            # Try same-name function
            impl = getattr(module, name.replace("-", "_"), None)
        if not callable(impl):
            impl = getattr(module, "execute", None)
        if not callable(impl):
            raise PluginLoadError("No callable implementation found (TOOL_IMPLEMENTATION, function name, or execute)")

        wrapped = self._wrap_with_arg_validation(name, schema, impl)
        return PluginRecord(
            name=name,
            schema=schema,
            implementation=wrapped,
            source_path=source_path,
            version=getattr(module, "TOOL_VERSION", None),
            author=getattr(module, "TOOL_AUTHOR", None),
        )

    def load(self, reset: bool = False, additional_paths: Optional[List[str]] = None) -> Tuple[List[Dict[str, Any]], Dict[str, Callable[..., Any]]]:
        with self._lock:
            if reset:
                self._plugins = []
                self._schemas = []
                self._functions = {}

            search_paths = list(self._plugin_paths or self._default_paths())
            if additional_paths:
                for p in additional_paths:
                    ap = os.path.abspath(p)
                    if ap not in search_paths:
                        search_paths.append(ap)

            self._logger.debug(f"Plugin search paths: {search_paths}")

            here = os.path.dirname(os.path.abspath(__file__))
            internal = os.path.join(here, "plugins")
            loaded_names: set = set(self._functions.keys())
            for path in search_paths:
                # Internal plugins get clean module names under this package
                pkg_base = f"{__package__}.plugins" if os.path.abspath(path) == internal and __package__ else None

                for file_path in self._iter_module_files(path):
                    try:
                        module = self._import_module_from_path(file_path, pkg_base)
                        plugin = self._extract_plugin(module, file_path)
                        if plugin.name in loaded_names:
                            self._logger.warning(f"Duplicate tool name '{plugin.name}' from {file_path}; skipping")
                            continue
                        self._plugins.append(plugin)
                        self._schemas.append(plugin.schema)
                        self._functions[plugin.name] = plugin.implementation
                        loaded_names.add(plugin.name)
                        self._logger.info(f"Loaded plugin '{plugin.name}' from {file_path}")
                    except Exception as e:
                        self._logger.error(f"Failed to load plugin from {file_path}: {e}")
                        continue

            return list(self._schemas), dict(self._functions)

    @property
    def plugins(self) -> List[PluginRecord]:
        with self._lock:
            return list(self._plugins)

    @property
    def tool_schemas(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._schemas)

    @property
    def tool_functions(self) -> Dict[str, Callable[..., Any]]:
        with self._lock:
            return dict(self._functions)


# Module-level default manager and aggregates for core usage
_default_manager = PluginManager()
TOOL_SCHEMAS, TOOL_FUNCTIONS = _default_manager.load(reset=True)


def get_manager() -> PluginManager:
    return _default_manager


def reload_plugins(additional_paths: Optional[List[str]] = None) -> Tuple[List[Dict[str, Any]], Dict[str, Callable[..., Any]]]:
    """Reload plugins into the default manager and update module-level aggregates."""
    global TOOL_SCHEMAS, TOOL_FUNCTIONS
    schemas, funcs = _default_manager.load(reset=True, additional_paths=additional_paths)
    TOOL_SCHEMAS, TOOL_FUNCTIONS = schemas, funcs
    return schemas, funcs
