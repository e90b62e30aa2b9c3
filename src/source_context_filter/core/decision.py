"""Serializable reports about filter decisions and rule sets."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .models import LogEvent, LogEventLevel
from .source_context_filter import SourceContextFilter, extract_source_context


class FilterRule(BaseModel):
    source_context: str = Field(description="Category prefix the rule applies to.")
    minimum_level: LogEventLevel = Field(description="Lowest level that passes for this prefix.")


class FilterDecision(BaseModel):
    source_context: str | None = Field(
        default=None, description="Source context of the event, if it had one."
    )
    level: LogEventLevel = Field(description="Level of the evaluated event.")
    enabled: bool = Field(description="True when the event would be emitted.")
    matched_rule: str | None = Field(
        default=None, description="Rule key that decided; null when the default level applied."
    )
    minimum_level: LogEventLevel = Field(description="Effective minimum level used for the decision.")


class FilterDescription(BaseModel):
    default_level: LogEventLevel
    rules: list[FilterRule] = Field(
        default_factory=list, description="Rules in the order they are tried."
    )


def explain(source_context_filter: SourceContextFilter, event: LogEvent) -> FilterDecision:
    """Evaluate ``event`` and report which rule decided."""
    source_context = extract_source_context(event)
    matched_rule, minimum_level = source_context_filter.minimum_level_for(source_context)
    return FilterDecision(
        source_context=source_context,
        level=event.level,
        enabled=event.level >= minimum_level,
        matched_rule=matched_rule,
        minimum_level=minimum_level,
    )


def describe(source_context_filter: SourceContextFilter) -> FilterDescription:
    """Return the filter's default level and rules in matching order."""
    rules = source_context_filter.rules
    return FilterDescription(
        default_level=source_context_filter.default_level,
        rules=[
            FilterRule(source_context=key, minimum_level=rules[key])
            for key in source_context_filter.ordered_keys
        ],
    )
