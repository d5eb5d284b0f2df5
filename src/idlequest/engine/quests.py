"""Completion and claim state machine, plus daily quests.

Entries move IN_PROGRESS -> COMPLETED -> CLAIMED. COMPLETED is derived
from the objectives on every read; only ``claimed`` is stored. Claiming
validates first, then marks the entry claimed, then credits the reward,
so a re-entrant second claim always sees the flag and fails.

Daily quests reset when the calendar date string changes, regardless of
how much time has elapsed.
"""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from idlequest.core.config import GameSettings, SessionSettings
from idlequest.core.constants import DAILY_DIFFICULTY_MAX, DAILY_DIFFICULTY_MIN, GOLD_RESOURCE_ID
from idlequest.core.exceptions import (
    AlreadyClaimedError,
    NotCompletedError,
    RerollLimitError,
    UnknownEntityError,
)
from idlequest.core.logging import get_logger
from idlequest.engine.economy import EconomyLedger
from idlequest.models.content import ContentCatalog
from idlequest.models.enums import QuestCategory, QuestStatus
from idlequest.models.quests import (
    DailyQuestTemplate,
    QuestLogState,
    QuestProgress,
    Reward,
)


logger = get_logger(__name__)


# =============================================================================
# Quest Book
# =============================================================================


class QuestBook:
    """Tracked quests, achievements and daily quests with one-time claims."""

    def __init__(self, catalog: ContentCatalog, state: QuestLogState | None = None) -> None:
        """Initialize the quest book.

        Args:
            catalog: Content providing quest and achievement definitions.
            state: Existing quest log to operate on.
        """
        self._catalog = catalog
        self._state = state if state is not None else QuestLogState()

    @property
    def record(self) -> QuestLogState:
        """The underlying durable record."""
        return self._state

    @property
    def entries(self) -> list[QuestProgress]:
        """Every tracked entry, in insertion order."""
        return list(self._state.entries.values())

    def get(self, quest_id: str) -> QuestProgress:
        """Get a tracked entry.

        Raises:
            UnknownEntityError: If the quest is not tracked.
        """
        try:
            return self._state.entries[quest_id]
        except KeyError:
            raise UnknownEntityError(
                f"Quest {quest_id!r} is not being tracked",
                entity_type="quest",
                entity_id=quest_id,
            ) from None

    def is_tracked(self, quest_id: str) -> bool:
        """Check whether a quest is in the log."""
        return quest_id in self._state.entries

    def status(self, quest_id: str) -> QuestStatus:
        """Get the claim state of a tracked entry."""
        return self.get(quest_id).status

    def start_quest(self, quest_id: str) -> QuestProgress:
        """Begin tracking a quest from the catalog.

        Starting an already tracked quest returns the existing entry.

        Raises:
            UnknownEntityError: If the quest is not in the catalog.
        """
        if quest_id in self._state.entries:
            return self._state.entries[quest_id]
        progress = self._catalog.quest(quest_id).new_progress()
        self.track(progress)
        logger.info("Quest started", quest_id=quest_id, category=progress.category)
        return progress

    def track(self, progress: QuestProgress) -> None:
        """Add or replace an entry."""
        self._state.entries = {**self._state.entries, progress.quest_id: progress}

    def untrack(self, quest_id: str) -> None:
        """Remove an entry if present."""
        if quest_id in self._state.entries:
            entries = dict(self._state.entries)
            del entries[quest_id]
            self._state.entries = entries

    def track_achievements(self) -> int:
        """Track every catalog achievement that is not tracked yet.

        Returns:
            Number of achievements added.
        """
        added = 0
        for definition in self._catalog.achievements:
            if definition.id not in self._state.entries:
                self.track(definition.new_progress())
                added += 1
        return added

    def active_entries(self) -> list[QuestProgress]:
        """Entries the tracker still updates: everything not claimed."""
        return [entry for entry in self._state.entries.values() if not entry.claimed]

    def completed_entries(self) -> list[QuestProgress]:
        """Entries whose objectives are all met and that await a claim."""
        return [
            entry
            for entry in self._state.entries.values()
            if entry.status == QuestStatus.COMPLETED
        ]

    def claimed_entries(self) -> list[QuestProgress]:
        """Entries whose reward was collected."""
        return [entry for entry in self._state.entries.values() if entry.claimed]

    def claim_reward(
        self,
        quest_id: str,
        ledger: EconomyLedger,
        *,
        efficiency: float = 1.0,
    ) -> Reward:
        """Collect a completed entry's reward exactly once.

        Gold and materials are credited to the ledger here. The returned
        reward carries experience, stat points and prestige tokens for the
        caller to apply.

        Args:
            quest_id: Entry to claim.
            ledger: Ledger receiving gold and materials.
            efficiency: Reward scaling factor.

        Returns:
            The reward that was granted.

        Raises:
            UnknownEntityError: If the quest is not tracked.
            AlreadyClaimedError: If the reward was already collected.
            NotCompletedError: If some objective is not met.
        """
        entry = self.get(quest_id)
        if entry.claimed:
            raise AlreadyClaimedError(f"{entry.name or quest_id} was already claimed", quest_id=quest_id)
        if not entry.completed:
            raise NotCompletedError(f"{entry.name or quest_id} is not completed", quest_id=quest_id)

        reward = entry.reward if efficiency == 1.0 else entry.reward.scaled(efficiency)
        entry.claimed = True
        ledger.credit(GOLD_RESOURCE_ID, reward.gold)
        for material_id, quantity in reward.materials.items():
            ledger.credit(material_id, quantity)

        logger.info(
            "Reward claimed",
            quest_id=quest_id,
            category=entry.category,
            gold=reward.gold,
            xp=reward.xp,
        )
        return reward


# =============================================================================
# Daily Quests
# =============================================================================


@dataclass(frozen=True)
class LoginReward:
    """Reward for the daily login streak."""

    streak: int
    gold: int
    prestige_tokens: int = 0


@dataclass(frozen=True)
class DailyRefresh:
    """Outcome of a daily refresh.

    Attributes:
        login_reward: Streak reward, if this is the first refresh today.
        regenerated: Whether a new set of daily quests was generated.
    """

    login_reward: LoginReward | None
    regenerated: bool


class DailyQuestBoard:
    """Generates, resets and rerolls daily quests; tracks the login streak."""

    def __init__(
        self,
        book: QuestBook,
        templates: Sequence[DailyQuestTemplate],
        *,
        game_settings: GameSettings,
        session_settings: SessionSettings,
    ) -> None:
        """Initialize the board.

        Args:
            book: Quest book that holds the generated entries.
            templates: Daily quest templates.
            game_settings: Login streak rewards.
            session_settings: Daily quest count and reroll allowance.
        """
        self._book = book
        self._templates = list(templates)
        self._game_settings = game_settings
        self._session_settings = session_settings

    @property
    def quests(self) -> list[QuestProgress]:
        """Today's daily quests."""
        return [e for e in self._book.entries if e.category == QuestCategory.DAILY]

    @property
    def login_streak(self) -> int:
        """Consecutive days with a refresh."""
        return self._book.record.daily.login_streak

    @property
    def rerolls_remaining(self) -> int:
        """Rerolls left today."""
        used = self._book.record.daily.rerolls_used
        return max(0, self._session_settings.max_daily_rerolls - used)

    def refresh(self, today: date) -> DailyRefresh:
        """Apply the login streak and reset daily quests on a new day.

        Dates are compared as ISO strings. Calling this again on the same
        day does nothing.

        Args:
            today: The current calendar date.

        Returns:
            What changed.
        """
        today_str = today.isoformat()
        daily = self._book.record.daily
        login_reward: LoginReward | None = None

        if daily.last_login_date != today_str:
            yesterday_str = (today - timedelta(days=1)).isoformat()
            streak = daily.login_streak + 1 if daily.last_login_date == yesterday_str else 1
            daily.last_login_date = today_str
            daily.login_streak = streak
            login_reward = self._login_reward(streak)
            logger.info("Daily login", streak=streak, gold=login_reward.gold)

        regenerated = False
        if daily.quest_date != today_str:
            self._regenerate(today_str)
            regenerated = True

        return DailyRefresh(login_reward=login_reward, regenerated=regenerated)

    def reroll(self, quest_id: str) -> QuestProgress:
        """Replace one daily quest with a newly generated one.

        Raises:
            UnknownEntityError: If the quest is not a tracked daily quest.
            AlreadyClaimedError: If the quest was already claimed.
            RerollLimitError: If no rerolls remain today.
        """
        entry = self._book.get(quest_id)
        if entry.category != QuestCategory.DAILY:
            raise UnknownEntityError(
                f"{quest_id!r} is not a daily quest",
                entity_type="daily_quest",
                entity_id=quest_id,
            )
        if entry.claimed:
            raise AlreadyClaimedError("Claimed daily quests cannot be rerolled", quest_id=quest_id)
        if self.rerolls_remaining <= 0:
            raise RerollLimitError("No daily rerolls remaining", quest_id=quest_id)

        daily = self._book.record.daily
        replacement = self._generate(daily.quest_date)
        self._book.untrack(quest_id)
        self._book.track(replacement)
        daily.rerolls_used = daily.rerolls_used + 1
        logger.info("Daily quest rerolled", old=quest_id, new=replacement.quest_id)
        return replacement

    # =========================================================================
    # Helpers
    # =========================================================================

    def _login_reward(self, streak: int) -> LoginReward:
        s = self._game_settings
        tokens = streak // s.login_streak_token_interval if streak % s.login_streak_token_interval == 0 else 0
        return LoginReward(streak=streak, gold=s.login_streak_gold * streak, prestige_tokens=tokens)

    def _regenerate(self, today_str: str) -> None:
        for entry in self.quests:
            self._book.untrack(entry.quest_id)
        daily = self._book.record.daily
        daily.quest_date = today_str
        daily.rerolls_used = 0
        daily.generated = 0
        if not self._templates:
            return
        for _ in range(self._session_settings.daily_quest_count):
            self._book.track(self._generate(today_str))
        logger.info("Daily quests generated", date=today_str, count=len(self.quests))

    def _generate(self, date_str: str) -> QuestProgress:
        daily = self._book.record.daily
        serial = daily.generated
        daily.generated = serial + 1
        rng = random.Random(f"{date_str}:{serial}")

        template = rng.choice(self._templates)
        factor = rng.uniform(DAILY_DIFFICULTY_MIN, DAILY_DIFFICULTY_MAX)
        quest_id = f"daily-{date_str}-{serial}"
        objective = template.objective.model_copy(
            update={
                "id": f"{quest_id}-objective",
                "current": 0,
                "target": max(1, math.floor(template.objective.target * factor)),
            },
            deep=True,
        )
        return QuestProgress(
            quest_id=quest_id,
            name=template.name,
            category=QuestCategory.DAILY,
            objectives=[objective],
            reward=template.reward.scaled(factor, minimum_material=1),
        )


__all__ = [
    "QuestBook",
    "LoginReward",
    "DailyRefresh",
    "DailyQuestBoard",
]
