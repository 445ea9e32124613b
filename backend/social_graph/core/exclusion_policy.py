"""Exclusion Policy — deployment-wide strategy for how exclusions affect interaction.

Invariants:
    - All methods are PURE: no IO, no async, no side effects
    - MutualBlockPolicy.excludes is symmetric; OneSidedAvoidPolicy never gates
    - viewer_excludes is per-viewer in both variants (only the excluder sees the flag)
    - Exactly one policy instance per process, chosen from configuration

Design Decisions:
    - Strategy object over per-route branching: one engine, two behaviours
      (ADR: the gate-vs-display split is a configuration decision)
    - Protocol over ABC: structural subtyping, tests can pass any conforming stub
"""

from typing import Protocol

from social_graph.core.domain_types import ExclusionVariant, UserRecord


class ExclusionPolicy(Protocol):
    """Contract consumed by the lifecycle engine and profile projection."""
    variant: ExclusionVariant
    gates_interaction: bool

    def excludes(self, a: UserRecord, b: UserRecord) -> bool: ...
    def viewer_excludes(self, viewer: UserRecord, subject: UserRecord) -> bool: ...


class MutualBlockPolicy:
    """Either party having blocked the other fully blocks interaction."""
    variant = ExclusionVariant.BLOCK
    gates_interaction = True

    def excludes(self, a: UserRecord, b: UserRecord) -> bool:
        return a.has_excluded(b.public_id) or b.has_excluded(a.public_id)

    def viewer_excludes(self, viewer: UserRecord, subject: UserRecord) -> bool:
        return viewer.has_excluded(subject.public_id)


class OneSidedAvoidPolicy:
    """Avoidance only changes presentation for the avoiding user."""
    variant = ExclusionVariant.AVOID
    gates_interaction = False

    def excludes(self, a: UserRecord, b: UserRecord) -> bool:
        return False

    def viewer_excludes(self, viewer: UserRecord, subject: UserRecord) -> bool:
        return viewer.has_excluded(subject.public_id)


def select_policy(variant: ExclusionVariant | str) -> ExclusionPolicy:
    """Build the policy for a deployment. Raises ValueError on unknown variants."""
    variant = ExclusionVariant(variant)
    if variant is ExclusionVariant.BLOCK:
        return MutualBlockPolicy()
    return OneSidedAvoidPolicy()


def exclusion_labels(policy: ExclusionPolicy) -> tuple[str, str]:
    """Response keys for exclude/unexclude: ("blocked", "unblocked") or ("avoided", "unavoided")."""
    if policy.variant is ExclusionVariant.BLOCK:
        return "blocked", "unblocked"
    return "avoided", "unavoided"
