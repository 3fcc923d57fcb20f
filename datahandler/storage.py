"""Saving and loading all variables as CSV or JSON files."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Union

from .manager import Manager
from .variable import (
    ErrorOptions,
    ErrorType,
    LineType,
    Naming,
    PointShape,
    Variable,
    VisualOptions,
)

PathLike = Union[str, os.PathLike]

_NAMED_COLORS = {
    "black": "#000000",
    "white": "#ffffff",
    "red": "#ff0000",
    "green": "#008000",
    "blue": "#0000ff",
    "yellow": "#ffff00",
    "cyan": "#00ffff",
    "magenta": "#ff00ff",
    "gray": "#808080",
    "grey": "#808080",
    "orange": "#ffa500",
    "purple": "#800080",
}

_HEX_DIGITS = set("0123456789abcdef")


def _color_name(color: str) -> str:
    """Normalise a colour to ``#rrggbb``; unknown colours become black."""
    text = color.strip().lower()
    if text.startswith("#") and set(text[1:]) <= _HEX_DIGITS:
        digits = text[1:]
        if len(digits) == 3:
            return "#" + "".join(d * 2 for d in digits)
        if len(digits) == 6:
            return "#" + digits
    return _NAMED_COLORS.get(text, "#000000")


def _to_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        return 0.0


def _to_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def _error_type(code: int) -> ErrorType:
    return ErrorType.RELATIVE if code == 1 else ErrorType.ABSOLUTE


class CsvFormat:
    """Four lines per variable: measurements, naming, error, visual settings."""

    def save(self, manager: Manager, path: PathLike) -> None:
        count = manager.measurements_count()
        last = manager.variables_count() - 1
        with open(path, "w", encoding="utf-8") as file:
            for index, variable in enumerate(manager):
                file.write(
                    "".join(f"{variable.measurements[j]:g}," for j in range(count))
                    + "\n"
                )
                file.write(f"{variable.naming.title},{variable.naming.tag},\n")
                file.write(f"{int(variable.error.type)},{variable.error.value:g},\n")
                visual = variable.visual
                line = ",".join(
                    (
                        str(int(visual.visible)),
                        str(visual.width),
                        _color_name(visual.color),
                        visual.point_shape.label,
                        visual.line_type.label,
                    )
                )
                if index != last:
                    line += ","
                file.write(line + "\n")

    def load(self, manager: Manager, path: PathLike) -> None:
        """Replace the manager's variables with those in the file.

        Raises ValueError if a record is incomplete.
        """
        with open(path, encoding="utf-8") as file:
            lines = file.read().splitlines()
        manager.clear()
        for start in range(0, len(lines), 4):
            record = lines[start : start + 4]
            record += [""] * (4 - len(record))
            measurements, naming, error, visual = (line.split(",") for line in record)
            if len(naming) < 2 or len(error) < 2 or len(visual) < 5:
                raise ValueError(f"incomplete variable record at line {start + 1}")
            variable = Variable(
                measurements=[_to_float(value) for value in measurements[:-1]],
                naming=Naming(naming[0], naming[1]),
                error=ErrorOptions(_to_float(error[1]), _error_type(_to_int(error[0]))),
                visual=VisualOptions(
                    visible=bool(_to_int(visual[0])),
                    width=_to_int(visual[1]),
                    color=_color_name(visual[2]),
                    point_shape=PointShape.from_label(visual[3]),
                    line_type=LineType.from_label(visual[4]),
                ),
            )
            manager.add_variable(variable)


def _json_float(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return 0.0


def _json_int(value: Any) -> int:
    number = _json_float(value)
    return int(number) if number.is_integer() else 0


def _json_str(value: Any, default: str) -> str:
    return value if isinstance(value, str) else default


def _json_object(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


class JsonFormat:
    """An array with one object per variable."""

    def save(self, manager: Manager, path: PathLike) -> None:
        document = [
            {
                "Naming": {"title": v.naming.title, "tag": v.naming.tag},
                "Error": {"type": int(v.error.type), "value": v.error.value},
                "Visual": {
                    "visible": v.visual.visible,
                    "width": v.visual.width,
                    "color": _color_name(v.visual.color),
                    "point_shape": v.visual.point_shape.label,
                    "line_type": v.visual.line_type.label,
                },
                "Measurements": list(v.measurements),
            }
            for v in manager
        ]
        Path(path).write_text(
            json.dumps(document, indent=4, sort_keys=True) + "\n", encoding="utf-8"
        )

    def load(self, manager: Manager, path: PathLike) -> None:
        """Replace the manager's variables if the file holds any."""
        text = Path(path).read_text(encoding="utf-8")
        try:
            document = json.loads(text)
        except json.JSONDecodeError:
            return
        if not isinstance(document, list):
            return
        variables = []
        for item in document:
            entry = _json_object(item)
            measurements = entry.get("Measurements")
            naming = _json_object(entry.get("Naming"))
            error = _json_object(entry.get("Error"))
            visual = _json_object(entry.get("Visual"))
            visible = visual.get("visible")
            variables.append(
                Variable(
                    measurements=[
                        _json_float(value)
                        for value in (measurements if isinstance(measurements, list) else [])
                    ],
                    naming=Naming(
                        _json_str(naming.get("title"), "unnamed"),
                        _json_str(naming.get("tag"), ""),
                    ),
                    error=ErrorOptions(
                        _json_float(error.get("value")),
                        _error_type(_json_int(error.get("type"))),
                    ),
                    visual=VisualOptions(
                        visible=visible if isinstance(visible, bool) else False,
                        width=_json_int(visual.get("width")),
                        color=_color_name(_json_str(visual.get("color"), "")),
                        point_shape=PointShape.from_label(
                            _json_str(visual.get("point_shape"), "")
                        ),
                        line_type=LineType.from_label(
                            _json_str(visual.get("line_type"), "")
                        ),
                    ),
                )
            )
        if variables:
            manager.clear()
            for variable in variables:
                manager.add_variable(variable)


def format_for_path(path: PathLike) -> CsvFormat | JsonFormat:
    """Choose the file format from the file's extension."""
    name = os.fspath(path)
    if name.endswith(".csv"):
        return CsvFormat()
    if name.endswith(".json"):
        return JsonFormat()
    raise ValueError(f"unsupported file type: {name!r}")


def save(manager: Manager, path: PathLike) -> None:
    format_for_path(path).save(manager, path)


def load(manager: Manager, path: PathLike) -> None:
    format_for_path(path).load(manager, path)