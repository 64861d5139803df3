"""Merge per date slot records into one document per location"""
from typing import Iterable

import orjson

from ..schema.booking import DateSlotMap, SlotRecord


def combine_slots(records: Iterable[SlotRecord]) -> DateSlotMap:
    """Map each record's date to its slots. Later records win on duplicate dates."""
    slot_map: DateSlotMap = {}

    for record in records:
        slot_map[record.date] = record.slots

    return slot_map


def dump_slot_map(slot_map: DateSlotMap) -> bytes:
    """Serialize a slot map as indented json.

    Dates are sorted so the same set of records gives the same bytes no matter
    which order the fetches completed in. Slot fields keep their wire order.
    """
    doc = {
        date: [slot.model_dump(by_alias=True) for slot in slot_map[date]]
        for date in sorted(slot_map)
    }

    return orjson.dumps(doc, option=orjson.OPT_INDENT_2)
