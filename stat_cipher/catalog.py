"""
Unit Catalog — Key Material Source
===================================
Loads selectable units from a CSV table. Each unit has a catalog id
(the key index) and six base stats (the key vector).

CSV columns:  id,name_zh,hp,atk,def,spa,spd,spe[,icon_emoji,role]

Some units are "hidden": they only show up in a visible listing with
a fixed probability, so they have to be discovered by refreshing.
"""

import csv
import io
import logging
import random
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple, Union

from .block import BlockCipher, UnitKey
from .errors import CatalogError

logger = logging.getLogger(__name__)

STAT_COLUMNS = ("hp", "atk", "def", "spa", "spd", "spe")


class Unit(NamedTuple):
    id: int
    name: str
    stats: Tuple[int, ...]
    icon: str = "?"
    role: str = ""
    hidden: bool = False

    @property
    def key(self) -> UnitKey:
        return UnitKey(self.stats, self.id)


class UnitCatalog:
    """In-memory unit table with a randomised visibility filter."""

    HIDDEN_IDS         = (25,)
    HIDDEN_APPEAR_RATE = 0.15

    def __init__(self, units: Iterable[Unit],
                 hidden_ids: Iterable[int] = None,
                 hidden_appear_rate: float = None):
        hidden = set(self.HIDDEN_IDS if hidden_ids is None else hidden_ids)
        self.hidden_appear_rate = (self.HIDDEN_APPEAR_RATE
                                   if hidden_appear_rate is None
                                   else hidden_appear_rate)
        self._units: Dict[int, Unit] = {}
        for unit in units:
            if unit.id in self._units:
                raise CatalogError(f"Duplicate unit id {unit.id} in catalog.")
            self._units[unit.id] = unit._replace(hidden=unit.id in hidden)

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self):
        return iter(self._units.values())

    def get(self, unit_id: int) -> Unit:
        try:
            return self._units[unit_id]
        except KeyError:
            raise KeyError(f"No unit with id {unit_id} in catalog.") from None

    @classmethod
    def from_csv(cls, source: Union[str, io.TextIOBase], **kwargs) -> "UnitCatalog":
        """
        Build a catalog from a CSV file path or an open text stream.

        Raises:
            CatalogError if a row is missing a column or has a stat
            outside 0-255.
        """
        if isinstance(source, str):
            with open(source, newline="", encoding="utf-8") as fh:
                units = cls._parse(fh)
        else:
            units = cls._parse(source)
        logger.info(f"Loaded {len(units)} units from catalog")
        return cls(units, **kwargs)

    @staticmethod
    def _parse(stream) -> List[Unit]:
        units = []
        # line 1 is the header
        for line_no, row in enumerate(csv.DictReader(stream), start=2):
            try:
                unit_id = int(row["id"])
                stats = BlockCipher.check_key([int(row[c]) for c in STAT_COLUMNS])
                name = row["name_zh"]
            except (KeyError, TypeError, ValueError) as e:
                raise CatalogError(f"Bad catalog row {line_no}: {e}") from e
            units.append(Unit(
                id=unit_id,
                name=name,
                stats=stats,
                icon=row.get("icon_emoji") or "?",
                role=row.get("role") or "",
            ))
        return units

    def visible(self, rng: Optional[random.Random] = None) -> List[Unit]:
        """Units to offer for selection; hidden units appear at random."""
        rng = rng or random
        shown = [u for u in self._units.values()
                 if not u.hidden or rng.random() < self.hidden_appear_rate]
        if any(u.hidden for u in shown):
            logger.debug("Hidden unit appeared in listing")
        return shown
