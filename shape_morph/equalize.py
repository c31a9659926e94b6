"""Equalize point counts across a batch of definitions.

Shorter definitions get zero length segments (clones of an existing end
position) spread evenly along their outline, so every definition of the batch
can be interpolated point for point with any other.
"""

import logging
import math

from shape_morph.types import Definition, Point

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _clone_segment(point: Point) -> list[Point]:
    clone = point.model_copy(update={"is_clone": True})
    return [clone, clone.model_copy(), clone.model_copy()]


def equalize_definition(definition: Definition, segments: int) -> Definition:
    """Grow a definition to `segments` cubic segments by cloning end positions.

    Clones are inserted after every `delta`-th segment, where `delta` spreads
    the missing segments over the existing ones; the pass repeats until the
    target is reached. Returns the definition itself when nothing is missing.
    """
    if definition.segment_count >= segments:
        return definition

    triples = [definition.points[i : i + 3] for i in range(0, len(definition.points), 3)]
    if not triples:
        triples = [_clone_segment(definition.anchor)]

    while len(triples) < segments:
        needed = segments - len(triples)
        delta = max(1, _round_half_up(len(triples) / needed))
        grown: list[list[Point]] = []
        inserted = 0
        for index, triple in enumerate(triples):
            grown.append(triple)
            if index % delta == 0 and inserted < needed:
                grown.append(_clone_segment(triple[-1]))
                inserted += 1
        triples = grown

    points = [point for triple in triples for point in triple]
    return Definition(anchor=definition.anchor, points=points)


def equalize(definitions: list[Definition]) -> list[Definition]:
    """Give every definition of a batch the same number of cubic points."""
    if not definitions:
        return []

    segments = max(definition.segment_count for definition in definitions)
    equalized = [equalize_definition(definition, segments) for definition in definitions]
    logger.debug("Equalized %d definitions to %d segments", len(definitions), segments)
    return equalized
