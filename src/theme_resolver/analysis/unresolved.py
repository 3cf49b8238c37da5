"""
Detection of ``var()`` references that survived resolution.

Compares each declaration before and after resolution. Whatever references
remain in the resolved value are reported with a best guess at the cause:
framework-internal variables (``--tw-*``) are external, a variable pointing
at itself is a deliberate fallback, anything else is unknown.
"""

from __future__ import annotations

from collections import defaultdict

from ..core.ir import Declaration, DeclarationSource, LikelyCause, UnresolvedReference
from ..core.namespaces import EXTERNAL_PREFIX, VAR_REFERENCE_WITH_FALLBACK_PATTERN


def determine_likely_cause(variable_name: str, referenced: str) -> LikelyCause:
    if referenced == variable_name:
        return LikelyCause.SELF_REFERENTIAL
    if referenced.startswith(EXTERNAL_PREFIX):
        return LikelyCause.EXTERNAL
    return LikelyCause.UNKNOWN


def detect_unresolved(
    original: list[Declaration], resolved: list[Declaration]
) -> list[UnresolvedReference]:
    """Report every reference still present after resolution.

    Declarations are paired by name, scope and variant. One entry is produced per
    remaining reference, so ``calc(var(--a) + var(--b))`` can yield two.
    """
    resolved_by_identity = {declaration.identity: declaration for declaration in resolved}
    unresolved: list[UnresolvedReference] = []

    for declaration in original:
        if "var(" not in declaration.value:
            continue

        counterpart = resolved_by_identity.get(declaration.identity)
        if counterpart is None or "var(" not in counterpart.value:
            continue

        for match in VAR_REFERENCE_WITH_FALLBACK_PATTERN.finditer(counterpart.value):
            referenced, fallback = match.group(1), match.group(2)
            unresolved.append(
                UnresolvedReference(
                    variable_name=declaration.name,
                    original_value=declaration.value,
                    referenced_variable=referenced,
                    fallback_value=fallback.strip() if fallback else None,
                    source=declaration.source,
                    variant_name=declaration.variant_name,
                    selector=declaration.selector,
                    likely_cause=determine_likely_cause(declaration.name, referenced),
                )
            )

    return unresolved


def group_by_likely_cause(
    references: list[UnresolvedReference],
) -> dict[LikelyCause, list[UnresolvedReference]]:
    grouped: dict[LikelyCause, list[UnresolvedReference]] = {cause: [] for cause in LikelyCause}
    for reference in references:
        grouped[reference.likely_cause].append(reference)
    return grouped


def group_by_source(
    references: list[UnresolvedReference],
) -> dict[DeclarationSource, list[UnresolvedReference]]:
    grouped: dict[DeclarationSource, list[UnresolvedReference]] = defaultdict(list)
    for reference in references:
        grouped[reference.source].append(reference)
    return dict(grouped)
