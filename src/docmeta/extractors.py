"""Harvest function descriptors from Python and SQL sources."""

from __future__ import annotations

import importlib.util
import inspect
import logging
import re
import sys
from pathlib import Path

import pglast
from pglast.enums import FunctionParameterMode

from .builder import build_descriptor, definition_name
from .errors import DefinitionError, ExtractionError
from .models import DocumentedFunction, ExtractionResult, FuncDescriptor
from .types import TypeRegistry, sql_registry

log = logging.getLogger(__name__)

_DOC_BLOCK_RE = re.compile(r"--\s*@function\s+(\S+)\s*\n((?:--[^\n]*\n)*)", re.MULTILINE)
_COMMENT_PREFIX_RE = re.compile(r"^--\s?")


def _relative_path(path: Path, root: Path) -> str:
    """Convert absolute path to relative from project root."""
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def _load_module(path: Path):
    """Dynamically load a Python module from path."""
    spec = importlib.util.spec_from_file_location("_doc_module", path)
    if spec is None or spec.loader is None:
        raise ExtractionError(f"Cannot load module from {path}", str(path))
    module = importlib.util.module_from_spec(spec)

    old_module = sys.modules.get("_doc_module")
    try:
        sys.modules["_doc_module"] = module
        spec.loader.exec_module(module)
        return module
    except DefinitionError:
        raise
    except Exception as e:
        raise ExtractionError(
            f"Failed to load {path}: {e.__class__.__name__}: {e}", str(path)
        ) from e
    finally:
        if old_module is None:
            sys.modules.pop("_doc_module", None)
        else:
            sys.modules["_doc_module"] = old_module


def _is_public_definition(obj) -> bool:
    """Public function or class (not starting with _)."""
    return (inspect.isfunction(obj) or inspect.isclass(obj)) and not obj.__name__.startswith("_")


def _format_signature(name: str, sig: inspect.Signature | None) -> str:
    if sig is None:
        return f"{name}(...)"
    params = [str(p) for p in sig.parameters.values() if p.name not in ("self", "cls")]
    return f"{name}({', '.join(params)})"


def extract_python_docs(path: Path, root: Path) -> ExtractionResult:
    """Collect the `func_info` descriptors of a Python module's definitions.

    Raises:
        DefinitionError: If a definition's documentation does not build.
        ExtractionError: If the module cannot be loaded.
    """
    module = _load_module(path)

    docs: list[DocumentedFunction] = []
    all_public: list[str] = []

    for _, obj in inspect.getmembers(module, _is_public_definition):
        if obj.__module__ != "_doc_module":
            continue

        all_public.append(definition_name(obj))
        info = getattr(obj, "func_info", None)
        if not isinstance(info, FuncDescriptor):
            continue

        try:
            sig = inspect.signature(obj)
        except (TypeError, ValueError):
            sig = None

        try:
            _, lineno = inspect.getsourcelines(obj)
        except (OSError, TypeError):
            lineno = 0

        declared = []
        if sig is not None:
            declared = [
                p.name for p in sig.parameters.values() if p.name not in ("self", "cls")
            ]

        docs.append(
            DocumentedFunction(
                descriptor=info,
                language="python",
                signature=_format_signature(info.name, sig),
                source_file=_relative_path(path, root),
                line_number=lineno,
                declared_params=declared,
            )
        )
        log.debug("Harvested %s from %s", info.name, path)

    docs.sort(key=lambda d: d.name)
    all_public.sort()

    return ExtractionResult(functions=docs, all_public_functions=all_public)


def _type_name_to_str(tn) -> str:
    """Convert pglast TypeName to string."""
    if tn is None:
        return "void"
    names = [n.sval for n in tn.names]
    # Skip common schema prefixes for cleaner output
    if names and names[0] in ("pg_catalog", "public"):
        names = names[1:]
    base = ".".join(names)
    if tn.arrayBounds:
        base += "[]"
    if tn.setof:
        return f"setof {base}"
    return base


def extract_doc_blocks(content: str) -> dict[str, str]:
    """Map `-- @function name` to the comment text that follows it.

    The `--` prefix (and one following space) is stripped from each line,
    leaving doc text in the section grammar.
    """
    blocks = {}
    for m in _DOC_BLOCK_RE.finditer(content):
        lines = [_COMMENT_PREFIX_RE.sub("", line) for line in m.group(2).splitlines()]
        blocks[m.group(1).strip()] = "\n".join(lines).strip()
    return blocks


def extract_sql_docs(
    sql_dir: Path, root: Path, registry: TypeRegistry | None = None
) -> ExtractionResult:
    """Extract documentation from SQL files using the pglast parser.

    Raises:
        DefinitionError: If a doc block does not build.
    """
    registry = registry or sql_registry()
    docs: list[DocumentedFunction] = []
    all_public: list[str] = []
    issues: list[str] = []

    for sql_file in sorted(sql_dir.glob("*.sql")):
        content = sql_file.read_text()
        doc_blocks = extract_doc_blocks(content)
        used_doc_blocks: set[str] = set()

        try:
            stmts = pglast.parse_sql(content)
        except pglast.Error as e:
            log.warning("Failed to parse %s: %s", sql_file.name, e)
            issues.append(f"{sql_file.name}: failed to parse: {e}")
            continue

        for stmt in stmts:
            if not hasattr(stmt, "stmt") or not isinstance(
                stmt.stmt, pglast.ast.CreateFunctionStmt
            ):
                continue

            func = stmt.stmt
            func_name = ".".join(n.sval for n in func.funcname)

            # Skip internal functions
            if "._" in func_name:
                continue

            all_public.append(func_name)

            params = []
            declared = []
            table_cols = []
            for p in func.parameters or []:
                if p.name:
                    param_type = _type_name_to_str(p.argType)
                    if p.mode == FunctionParameterMode.FUNC_PARAM_TABLE:
                        table_cols.append(f"{p.name}: {param_type}")
                    else:
                        params.append(f"{p.name}: {param_type}")
                        declared.append(p.name)

            if table_cols:
                return_type = f"table({', '.join(table_cols)})"
            else:
                return_type = _type_name_to_str(func.returnType)

            doc_block = doc_blocks.get(func_name)
            if doc_block is None:
                continue
            used_doc_blocks.add(func_name)

            docs.append(
                DocumentedFunction(
                    descriptor=build_descriptor(func_name, doc_block, registry),
                    language="sql",
                    signature=f"{func_name}({', '.join(params)}) -> {return_type}",
                    source_file=_relative_path(sql_file, root),
                    line_number=content[: stmt.stmt_location].count("\n") + 1,
                    declared_params=declared,
                )
            )
            log.debug("Harvested %s from %s", func_name, sql_file)

        for name in sorted(set(doc_blocks) - used_doc_blocks):
            if "._" not in name:
                log.warning(
                    "@function %s has no matching CREATE FUNCTION in %s",
                    name,
                    sql_file.name,
                )
                issues.append(f"{sql_file.name}: @function {name} has no matching CREATE FUNCTION")

    docs.sort(key=lambda d: d.name)
    all_public.sort()

    return ExtractionResult(
        functions=docs, all_public_functions=all_public, language="sql", issues=issues
    )
