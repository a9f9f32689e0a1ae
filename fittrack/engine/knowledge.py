"""Read-only knowledge base for the assistant.

Built once by ``load_knowledge_base`` and passed to whatever needs it. The
mappings are wrapped in ``MappingProxyType`` so nothing can edit them in place.
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping


class TipCategory(str, Enum):
    GENERAL = "general"
    NUTRITION = "nutrition"
    HYDRATION = "hydration"
    SLEEP = "sleep"
    CARDIO = "cardio"
    STRENGTH = "strength"
    RECOVERY = "recovery"


@dataclass(frozen=True)
class KnowledgeBase:
    tips: Mapping[TipCategory, tuple[str, ...]]
    quotes: tuple[str, ...]

    def tip(self, category: TipCategory, index: int = 0) -> str:
        entries = self.tips[category]
        return entries[index % len(entries)]

    def quote(self, index: int = 0) -> str:
        return self.quotes[index % len(self.quotes)]


_TIPS = {
    TipCategory.GENERAL: (
        "Aim for at least 150 minutes of moderate activity every week.",
        "Short walks after meals add up and help with blood sugar control.",
        "Track your progress weekly rather than daily to see real trends.",
    ),
    TipCategory.NUTRITION: (
        "Fill half your plate with vegetables at every meal.",
        "Include a source of protein with each meal to stay full longer.",
        "Limit sugary drinks; they add calories without keeping you full.",
    ),
    TipCategory.HYDRATION: (
        "Drink a glass of water when you wake up.",
        "Carry a water bottle and refill it through the day.",
    ),
    TipCategory.SLEEP: (
        "Adults need 7-9 hours of sleep for proper recovery.",
        "Keep a consistent bedtime, even on weekends.",
    ),
    TipCategory.CARDIO: (
        "Start cardio at a pace where you can still hold a conversation.",
        "Mix steady sessions with short intervals to build endurance.",
    ),
    TipCategory.STRENGTH: (
        "Train each major muscle group at least twice a week.",
        "Increase weight gradually once you can finish all sets with good form.",
    ),
    TipCategory.RECOVERY: (
        "Plan at least one rest or active recovery day each week.",
        "Light stretching or yoga on rest days keeps you mobile.",
    ),
}

_QUOTES = (
    "The only bad workout is the one that didn't happen.",
    "Small steps every day add up to big results.",
    "Progress, not perfection.",
    "Your body can stand almost anything. It's your mind you have to convince.",
)


@lru_cache
def load_knowledge_base() -> KnowledgeBase:
    return KnowledgeBase(tips=MappingProxyType(dict(_TIPS)), quotes=_QUOTES)
