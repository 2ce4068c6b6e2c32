"""
Type inference for consensus novel adjacencies
"""
from dataclasses import dataclass, field
from typing import Dict

from .breakpoint import NovelAdjacency
from .constants import (
    CONNECTION_TYPE,
    DUP_TANDEM_ID_PREFIX,
    SVTYPE,
    SYMBOLIC_ALT_ALLELE,
    VARIANT_ID_FIELD_SEPARATOR,
)
from .error import ClassificationError, InternalInvariantViolation, ValidationError


@dataclass(frozen=True)
class SvType:
    """
    The inferred type of a novel adjacency. A closed union over :class:`SVTYPE` discriminated by kind

    Attributes:
        kind: one of the SVTYPE values
        variant_id: identifier for the variant, derived from the type and the breakpoint
        alt_allele: the symbolic alternate allele
        sv_length: signed length of the event (negative for deletions)
        attributes: type specific attributes of the variant
    """

    kind: str
    variant_id: str
    alt_allele: str
    sv_length: int
    attributes: Dict[str, object] = field(default_factory=dict, hash=False)

    def __str__(self):
        return self.kind


def _variant_id(prefix: str, novel_adjacency: NovelAdjacency) -> str:
    return VARIANT_ID_FIELD_SEPARATOR.join(
        [prefix, novel_adjacency.chr, str(novel_adjacency.start), str(novel_adjacency.end)]
    )


def insertion(novel_adjacency: NovelAdjacency) -> SvType:
    return SvType(
        kind=SVTYPE.INS,
        variant_id=_variant_id(SVTYPE.INS, novel_adjacency),
        alt_allele=SYMBOLIC_ALT_ALLELE[SVTYPE.INS],
        sv_length=len(novel_adjacency.complication.inserted_sequence),
    )


def tandem_duplication(novel_adjacency: NovelAdjacency) -> SvType:
    complication = novel_adjacency.complication
    return SvType(
        kind=SVTYPE.DUP,
        variant_id=_variant_id(DUP_TANDEM_ID_PREFIX, novel_adjacency),
        alt_allele=SYMBOLIC_ALT_ALLELE[SVTYPE.DUP],
        sv_length=len(complication.inserted_sequence)
        + len(complication.duplication.repeat_unit_ref_span),
    )


def deletion(novel_adjacency: NovelAdjacency) -> SvType:
    return SvType(
        kind=SVTYPE.DEL,
        variant_id=_variant_id(SVTYPE.DEL, novel_adjacency),
        alt_allele=SYMBOLIC_ALT_ALLELE[SVTYPE.DEL],
        sv_length=-(novel_adjacency.end - novel_adjacency.start),
    )


def inversion(novel_adjacency: NovelAdjacency) -> SvType:
    orientation = novel_adjacency.inversion_orientation
    return SvType(
        kind=SVTYPE.INV,
        variant_id=_variant_id(orientation or SVTYPE.INV, novel_adjacency),
        alt_allele=SYMBOLIC_ALT_ALLELE[SVTYPE.INV],
        sv_length=novel_adjacency.end - novel_adjacency.start,
        attributes={orientation: True} if orientation else {},
    )


def check_breakpoint_order(novel_adjacency: NovelAdjacency) -> None:
    """
    Raises:
        ClassificationError: the adjacency joins two different chromosomes (translocations are not supported)
        ValidationError: the left breakpoint is positioned to the right of the right breakpoint
    """
    if novel_adjacency.interchromosomal:
        raise ClassificationError(
            f'translocations are not supported. novel adjacency joins different chromosomes: {novel_adjacency}'
        )
    if novel_adjacency.start > novel_adjacency.end:
        raise ValidationError(
            f'An identified breakpoint pair has left breakpoint positioned to the right of right breakpoint: {novel_adjacency}'
        )


def classify(novel_adjacency: NovelAdjacency) -> SvType:
    """
    Infer the type of the variant from the span between the breakpoints, the connection type and the
    complications at the junction

    Args:
        novel_adjacency: the consensus breakpoint

    Returns:
        the inferred type with its id, symbolic allele and length

    Raises:
        ValidationError: the breakpoints are out of order
        ClassificationError: the signals are contradictory or the event is a translocation

    Note:
        duplications with and without additional inserted sequence between the repeat copies are both
        called as tandem duplications. The complication attributes record the difference
    """
    check_breakpoint_order(novel_adjacency)

    start = novel_adjacency.start
    end = novel_adjacency.end
    has_dup = novel_adjacency.complication.has_duplication_annotation()
    has_ins = bool(novel_adjacency.complication.inserted_sequence)

    if novel_adjacency.connection_type == CONNECTION_TYPE.STRAND_SWITCH:
        result = inversion(novel_adjacency)
    elif start == end:  # something is inserted
        if has_dup:  # expansion of the repeat, with or without inserted sequence between the copies
            result = tandem_duplication(novel_adjacency)
        elif has_ins:
            result = insertion(novel_adjacency)
        else:
            raise ClassificationError(
                f'suspected insertion but no inserted sequence could be inferred: {novel_adjacency}'
            )
    elif has_dup and has_ins:
        raise ClassificationError(
            f'suspected deletion with both inserted sequence and duplication (not supported): {novel_adjacency}'
        )
    else:  # clean, scarred or repeat contraction
        result = deletion(novel_adjacency)

    if result.kind not in SVTYPE.values():
        raise InternalInvariantViolation(f'Inferred type is not known: {result.kind}')
    return result
