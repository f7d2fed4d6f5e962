"""Write formatted cost figures into display slots."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from ..cost.calculator import CostSummary, FlatCostSummary
from ..utils.i18n import DisplayConfig
from .formatting import build_summary_strings

logger = logging.getLogger(__name__)


@dataclass
class DisplaySlot:
    """A text target in the display layer."""

    text: str = ""


class SummaryPanel:
    """Two-slot summary: yearly/horizon total and daily cost.

    Missing slots are reported on the log and never abort the update
    of the cost result itself.
    """

    def __init__(
        self,
        value_slots: List[DisplaySlot],
        label_slots: Optional[List[DisplaySlot]] = None,
        display_config: Optional[DisplayConfig] = None
    ):
        """Initialize the panel.

        Args:
            value_slots: Targets for the two formatted amounts
            label_slots: Optional targets for the two captions
            display_config: Locale, currency symbol and translations
        """
        self.value_slots = value_slots
        self.label_slots = label_slots or []
        self.display_config = display_config or DisplayConfig()

    def update(self, result: Union[CostSummary, FlatCostSummary]) -> bool:
        """Render a cost result into the slots.

        Args:
            result: Prorated or flat cost result

        Returns:
            True if the values were written, False if slots are missing
        """
        if len(self.value_slots) < 2:
            logger.error(f"Summary value slots missing: need 2, found {len(self.value_slots)}")
            return False

        strings = build_summary_strings(result, self.display_config)
        self.value_slots[0].text = strings["yearly_total"]
        self.value_slots[1].text = strings["daily_average"]

        # Labels only carry the active server count in prorated mode
        if isinstance(result, CostSummary) and len(self.label_slots) >= 2:
            t = self.display_config.translate
            self.label_slots[0].text = f"{t('yearly_cost')} ({strings['active_servers']}{t('server_count')})"
            self.label_slots[1].text = t("daily_avg_cost")

        return True
