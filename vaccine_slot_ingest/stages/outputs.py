"""Helper methods for writing slot documents"""

import pathlib

from ..schema.booking import DateSlotMap
from .aggregate import dump_slot_map

OUTPUT_SUFFIX = ".json"


def generate_output_path(output_dir: pathlib.Path, ext_id: str) -> pathlib.Path:
    """Generate output path for a location's slot document"""
    if not ext_id or "/" in ext_id or "\\" in ext_id or ext_id in (".", ".."):
        raise ValueError(f"Location id {ext_id!r} can't be used as a file name")

    return output_dir / f"{ext_id}{OUTPUT_SUFFIX}"


def write_slot_map(dst_filepath: pathlib.Path, slot_map: DateSlotMap) -> None:
    """Write slot map to dst_filepath, creating parent directories"""
    dst_filepath.parent.mkdir(parents=True, exist_ok=True)

    with dst_filepath.open("wb") as dst_file:
        dst_file.write(dump_slot_map(slot_map))
        dst_file.write(b"\n")
