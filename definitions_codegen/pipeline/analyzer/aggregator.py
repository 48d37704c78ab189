"""
Aggregator that builds the enum registry from definition sources.

Phase 2 of the pipeline: load every source in caller order into one registry,
then run the placeholder expansion pass over the finished registry.

Re-declaring an enum replaces its variants and grouping tag (last writer wins)
while properties declared against the same name keep accumulating.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ...errors import DefinitionsError, DuplicatePropertyError
from ..model.nodes import EnumModel, PropertyModel
from ..model.values import convert_literal
from .expander import Expander
from .name_resolver import to_pascal_case
from .registry import EnumDef, PropertyDef, Registry
from .sources import DefinitionSource

logger = logging.getLogger(__name__)


class Aggregator:
    """Loads definition sources into a Registry."""

    def __init__(self, registry: Registry | None = None):
        self.registry = registry if registry is not None else Registry()

    def add_all(self, sources: Iterable[DefinitionSource]) -> Registry:
        """
        Load every source in order.

        Raises:
            DefinitionsError: The first failure, with the source name as context
        """
        for source in sources:
            try:
                self.add_source(source)
            except DefinitionsError as e:
                raise e.with_context(f"failed to load data file `{source.name}`")

        for enum_def in self.registry.sorted_enums():
            if not enum_def.declared:
                logger.warning(
                    "Enum `%s` has properties but no declaration; generating it without variants",
                    enum_def.name,
                )
        return self.registry

    def add_source(self, source: DefinitionSource) -> None:
        model_file = source.load()
        logger.debug("Loaded %d declaration(s) from `%s`", len(model_file.models), source.name)

        for model in model_file.models:
            if isinstance(model, EnumModel):
                self._add_enum(model, source.name)
            elif isinstance(model, PropertyModel):
                self._add_property(model, source.name)
            else:
                raise DefinitionsError(f"unsupported declaration {type(model).__name__}")

    def _add_enum(self, model: EnumModel, file_name: str) -> None:
        existing = self.registry.enums.setdefault(model.name, EnumDef(name=model.name))
        if existing.declared:
            logger.debug("Enum `%s` re-declared in `%s`; replacing its variants", model.name, file_name)

        existing.name_pascal_case = to_pascal_case(model.name)
        existing.variants = list(model.variants)
        existing.variants_pascal_case = [to_pascal_case(variant) for variant in model.variants]
        existing.file = file_name
        existing.declared = True

    def _add_property(self, model: PropertyModel, file_name: str) -> None:
        existing = self.registry.enums.get(model.on)
        if existing is None:
            existing = EnumDef(name=model.on, name_pascal_case=to_pascal_case(model.on), file=file_name)
            self.registry.enums[model.on] = existing

        if model.name in existing.properties:
            first = existing.properties[model.name].file
            raise DuplicatePropertyError(
                f"property `{model.name}` defined twice on enum `{model.on}` (first declared in `{first}`)"
            )

        mapping = {}
        for entry in model.mapping:
            for key in entry.keys:
                try:
                    mapping[key] = convert_literal(entry.literal, model.type)
                except DefinitionsError as e:
                    raise e.with_context(f"invalid value for `{key}` in property `{model.name}`")

        existing.properties[model.name] = PropertyDef(
            name=model.name,
            type=model.type,
            mapping=dict(sorted(mapping.items())),
            file=file_name,
        )


def load_all(sources: Iterable[DefinitionSource]) -> Registry:
    """
    Create a Registry from definition sources and expand its placeholders.

    Args:
        sources: Definition sources in load order

    Returns:
        The expanded registry
    """
    registry = Aggregator().add_all(sources)
    try:
        Expander(registry).expand()
    except DefinitionsError as e:
        raise e.with_context("failed to expand expressions")

    logger.info(
        "Loaded %d enum(s) with %d property table(s)",
        len(registry.enums),
        sum(len(e.properties) for e in registry.enums.values()),
    )
    return registry
