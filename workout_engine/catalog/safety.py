"""Limitation-driven exclusion rules.

Each rule fires when one of its trigger words appears in the user's
limitations text and then excludes any exercise whose name or instructions
mention one of its movement patterns. Rules are additive. Matching is plain
substring matching on lowercased text, so anything ambiguous is excluded.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from workout_engine.catalog.exercises import ContentUnit

if TYPE_CHECKING:
    from workout_engine.generation.schemas import GeneratedPayload, GeneratedUnit


@dataclass(frozen=True)
class ExclusionRule:
    name: str
    triggers: tuple[str, ...]
    patterns: tuple[str, ...]

    def fires(self, limitations: str) -> bool:
        return any(trigger in limitations for trigger in self.triggers)

    def excludes(self, text: str) -> bool:
        return any(pattern in text for pattern in self.patterns)


DEFAULT_RULES: tuple[ExclusionRule, ...] = (
    ExclusionRule(
        name="shoulder",
        triggers=("shoulder", "rotator", "labrum"),
        patterns=("overhead", "press", "pike", "handstand", "dip"),
    ),
    ExclusionRule(
        name="knee",
        triggers=("knee", "acl", "mcl", "meniscus", "patella"),
        patterns=("jump", "lunge", "deep squat", "pistol", "burpee", "hop", "step-up", "plyometric"),
    ),
    ExclusionRule(
        name="back",
        triggers=("back", "spine", "spinal", "disc", "sciatica", "lumbar"),
        patterns=("deadlift", "good morning", "forward bend", "forward fold", "twist", "bent-over", "toe touch", "swing"),
    ),
    ExclusionRule(
        name="wrist",
        triggers=("wrist", "carpal"),
        patterns=("push-up", "plank", "handstand", "burpee", "crawl", "renegade"),
    ),
    ExclusionRule(
        name="ankle",
        triggers=("ankle", "achilles"),
        patterns=("jump", "hop", "skip", "high knees", "run in place", "jog", "calf raise"),
    ),
    ExclusionRule(
        name="hip",
        triggers=("hip replacement", "hip pain", "hip injury", "labral"),
        patterns=("deep squat", "pistol", "lunge", "pigeon"),
    ),
    ExclusionRule(
        name="neck",
        triggers=("neck", "cervical"),
        patterns=("headstand", "crunch", "shoulder stand", "neck roll"),
    ),
)


def _unit_text(name: str, instructions: str | None) -> str:
    return f"{name} {instructions or ''}".lower()


class SafetyFilter:
    """Applies profile-derived exclusion rules to candidate exercises."""

    def __init__(self, rules: Sequence[ExclusionRule] = DEFAULT_RULES):
        self._rules = tuple(rules)

    def active_rules(self, limitations_text: str | None, areas: Iterable[str] = ()) -> list[ExclusionRule]:
        text = " ".join([limitations_text or "", *areas]).lower()
        if not text.strip():
            return []
        return [rule for rule in self._rules if rule.fires(text)]

    def is_excluded(self, name: str, instructions: str | None, rules: Sequence[ExclusionRule]) -> bool:
        text = _unit_text(name, instructions)
        return any(rule.excludes(text) for rule in rules)

    def exclude(
        self,
        units: Iterable[ContentUnit],
        limitations_text: str | None,
        areas: Iterable[str] = (),
    ) -> list[ContentUnit]:
        """Drop units that any fired rule excludes. Never raises."""
        units = list(units)
        rules = self.active_rules(limitations_text, areas)
        if not rules:
            return units

        kept = [unit for unit in units if not self.is_excluded(unit.name, unit.instructions, rules)]
        logger.debug(
            "Safety filter applied",
            rules=[rule.name for rule in rules],
            candidates_in=len(units),
            candidates_out=len(kept),
        )
        return kept

    def screen_payload(
        self,
        payload: GeneratedPayload,
        limitations_text: str | None,
        areas: Iterable[str] = (),
    ) -> GeneratedPayload:
        """Remove generated units that the active rules exclude.

        The generation service is told which exercises are allowed but is not
        trusted to comply, so its output is screened with the same rules.
        """
        rules = self.active_rules(limitations_text, areas)
        if not rules:
            return payload

        def _keep(units: list[GeneratedUnit]) -> list[GeneratedUnit]:
            return [u for u in units if not self.is_excluded(u.name, u.instructions, rules)]

        screened = payload.model_copy(
            update={
                "warmup": _keep(payload.warmup),
                "main": _keep(payload.main),
                "cooldown": _keep(payload.cooldown),
            }
        )
        removed = len(payload.all_units()) - len(screened.all_units())
        if removed:
            logger.warning(
                "Removed generated exercises that conflict with user limitations",
                removed=removed,
                rules=[rule.name for rule in rules],
            )
        return screened
