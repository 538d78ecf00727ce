"""Explicit registry resolving workbook names to schema declarations."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from excel_asset_importer.record_schema import SchemaDeclaration

logger = logging.getLogger(__name__)


class SchemaNotFoundError(Exception):
    """Raised when a workbook name has no registered schema declaration."""

    def __init__(self, excel_name: str) -> None:
        super().__init__(
            f"No asset schema is registered for workbook '{excel_name}'. "
            "Run 'excel-asset-importer generate-schema' on the workbook and declare "
            "the generated asset in the importer configuration."
        )
        self.excel_name = excel_name


class SchemaRegistry:
    """Ordered schema declarations with a lazily built, invalidatable name index.

    When two declarations share an external name, the one registered first wins.
    """

    def __init__(self, declarations: Iterable[SchemaDeclaration] = ()) -> None:
        self._declarations: list[SchemaDeclaration] = list(declarations)
        self._index: dict[str, SchemaDeclaration] | None = None

    @property
    def declarations(self) -> tuple[SchemaDeclaration, ...]:
        return tuple(self._declarations)

    def register(self, declaration: SchemaDeclaration) -> None:
        self._declarations.append(declaration)
        self.invalidate()

    def register_all(self, declarations: Iterable[SchemaDeclaration]) -> None:
        for declaration in declarations:
            self.register(declaration)

    def clear(self) -> None:
        """Forget every registered declaration."""
        self._declarations.clear()
        self.invalidate()

    def invalidate(self) -> None:
        """Drop the name index; the next lookup rebuilds it."""
        self._index = None

    def find_by_external_name(self, excel_name: str) -> SchemaDeclaration | None:
        if self._index is None:
            self._index = self._build_index()
        return self._index.get(excel_name)

    def resolve(self, excel_name: str) -> SchemaDeclaration:
        declaration = self.find_by_external_name(excel_name)
        if declaration is None:
            raise SchemaNotFoundError(excel_name)
        return declaration

    def _build_index(self) -> dict[str, SchemaDeclaration]:
        index: dict[str, SchemaDeclaration] = {}
        for declaration in self._declarations:
            name = declaration.external_name
            if name in index:
                logger.debug(
                    "Schema %s for workbook '%s' is shadowed by %s",
                    declaration.asset_type.name,
                    name,
                    index[name].asset_type.name,
                )
                continue
            index[name] = declaration
        return index


_DEFAULT_REGISTRY = SchemaRegistry()


def default_registry() -> SchemaRegistry:
    """Return the process-wide registry."""
    return _DEFAULT_REGISTRY


def register_schema(declaration: SchemaDeclaration) -> SchemaDeclaration:
    """Register a declaration with the process-wide registry."""
    _DEFAULT_REGISTRY.register(declaration)
    return declaration
