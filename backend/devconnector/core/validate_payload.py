"""Payload Validation — declarative per-field rules evaluated before any store access.

Invariants:
    - collect_violations is PURE and evaluates EVERY rule (no short-circuit across fields)
    - Violations keep rule order: [{"msg": ..., "param": ...}, ...]
    - The payload is never modified

Design Decisions:
    - Rules are data (field, kind, message, arg), so a route declares its contract
      as a module-level tuple next to the handler
    - email-validator for syntax only (check_deliverability=False): no DNS in the
      request path
"""

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from email_validator import EmailNotValidError, validate_email

from devconnector.core.domain_types import RuleKind
from devconnector.core.errors import PayloadValidationError


@dataclass(frozen=True)
class Rule:
    field: str
    kind: RuleKind
    message: str
    arg: int | None = None


def required(field: str, message: str) -> Rule:
    return Rule(field, RuleKind.REQUIRED, message)


def is_email(field: str, message: str) -> Rule:
    return Rule(field, RuleKind.IS_EMAIL, message)


def min_length(field: str, length: int, message: str) -> Rule:
    return Rule(field, RuleKind.MIN_LENGTH, message, length)


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


def _is_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _has_min_length(value: Any, length: int) -> bool:
    if value is None:
        return False
    return len(value if isinstance(value, str) else str(value)) >= length


def check_rule(rule: Rule, payload: Mapping[str, Any]) -> bool:
    """True when the payload satisfies the rule."""
    value = payload.get(rule.field)
    if rule.kind is RuleKind.REQUIRED:
        return _is_present(value)
    if rule.kind is RuleKind.IS_EMAIL:
        return _is_email(value)
    if rule.kind is RuleKind.MIN_LENGTH:
        return _has_min_length(value, rule.arg or 0)
    raise ValueError(f"unknown rule kind: {rule.kind}")


def collect_violations(
    payload: Any, rules: Sequence[Rule],
) -> list[dict]:
    """Evaluate all rules and return one entry per failed rule."""
    data = payload if isinstance(payload, Mapping) else {}
    return [
        {"msg": rule.message, "param": rule.field}
        for rule in rules
        if not check_rule(rule, data)
    ]


def validate_payload(payload: Any, rules: Sequence[Rule]) -> None:
    """Raise PayloadValidationError listing every violation, if any."""
    violations = collect_violations(payload, rules)
    if violations:
        raise PayloadValidationError(violations)
