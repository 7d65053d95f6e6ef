"""
Colour mapping and the community spectrum.

Maps moral scores onto a red (0) to yellow (50) to green (100) scale and
lines a community up from worst to best as gradient stops.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple, TYPE_CHECKING
import colorsys
import math

if TYPE_CHECKING:
    from ..agents.person import PersonSnapshot

SATURATION = 80
LIGHTNESS = 50
MAX_HUE = 120  # green


def map_range(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Map value linearly from [in_min, in_max] onto [out_min, out_max]."""
    t = (value - in_min) / (in_max - in_min)
    return out_min + t * (out_max - out_min)


def moral_score_to_hue(score: float) -> float:
    """Hue in degrees for a moral score: 0 is red, 120 is green."""
    s = max(0, min(100, score))
    return map_range(s, 0, 100, 0, MAX_HUE)


def _format_hue(hue: float) -> str:
    return f"{round(hue, 2):g}"


def moral_score_to_color(score: float) -> str:
    """CSS colour string for a moral score, e.g. ``hsl(60, 80%, 50%)``."""
    return f"hsl({_format_hue(moral_score_to_hue(score))}, {SATURATION}%, {LIGHTNESS}%)"


def moral_score_to_rgb(score: float) -> Tuple[float, float, float]:
    """Same colour as ``moral_score_to_color`` as an RGB tuple in [0, 1]."""
    hue = moral_score_to_hue(score)
    return colorsys.hls_to_rgb(hue / 360, LIGHTNESS / 100, SATURATION / 100)


@dataclass(frozen=True)
class SpectrumStop:
    """One person's place on the community gradient."""
    person: "PersonSnapshot"
    stop: float  # 0 = worst, 1 = best
    color: str

    @property
    def percentage(self) -> int:
        # Half rounds up, as CSS tooling expects
        return int(math.floor(self.stop * 100 + 0.5))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "person": self.person.to_dict(),
            "stop": self.stop,
            "color": self.color,
        }


def _snapshot(member: Any) -> "PersonSnapshot":
    # People are described on the way in; snapshots pass through
    describe = getattr(member, "describe", None)
    return describe() if callable(describe) else member


def build_community_spectrum(people: Iterable[Any]) -> List[SpectrumStop]:
    """
    Sort a community by moral score and assign gradient positions.

    Args:
        people: PersonSnapshot objects (or Persons, which are described
            first).

    Returns:
        Stops in ascending score order. Ties keep their input order. A
        single person sits at position 0.
    """
    snapshots = sorted((_snapshot(p) for p in people), key=lambda s: s.moral_score)
    n = len(snapshots)

    return [
        SpectrumStop(
            person=snapshot,
            stop=0.0 if n == 1 else index / (n - 1),
            color=snapshot.color,
        )
        for index, snapshot in enumerate(snapshots)
    ]


def community_gradient_css(people: Iterable[Any]) -> str:
    """CSS ``linear-gradient`` running from the worst to the best person."""
    parts = [f"{s.color} {s.percentage}%" for s in build_community_spectrum(people)]
    return f"linear-gradient(90deg, {', '.join(parts)})"
