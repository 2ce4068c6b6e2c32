from dataclasses import dataclass, field
from typing import Optional, Tuple

from .constants import CONNECTION_TYPE, INV_ORIENT
from .interval import Interval


class ReferenceLocus(Interval):
    """
    a position or range on a reference chromosome. Coordinates are given as 1-indexed and closed
    """

    chr: str

    @property
    def key(self):
        return (self.chr, self.start, self.end)

    def __init__(self, chr: str, start: int, end: Optional[int] = None):
        """
        Args:
            chr: the chromosome
            start: the genomic position of the locus
            end: the end of the locus if it is a range

        Examples:
            >>> ReferenceLocus('1', 1, 2)
            >>> ReferenceLocus('1', 1)
        """
        Interval.__init__(self, start, end)
        self.chr = str(chr)

    def __repr__(self):
        return '{}({}:{}-{})'.format(self.__class__.__name__, self.chr, self.start, self.end)

    def __str__(self):
        return '{}:{}-{}'.format(self.chr, self.start, self.end)

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def __lt__(self, other):
        return self.key < other.key


@dataclass(frozen=True)
class DuplicationAnnotation:
    """
    describes a tandem repeat expansion or contraction found at a breakpoint

    Attributes:
        repeat_unit_ref_span: the reference span of a single repeat unit
        seq_shapes: alignment shape (cigar) of each copy of the repeat on the contig
        repeat_num_on_ref: number of copies of the repeat unit on the reference
        repeat_num_on_contig: number of copies of the repeat unit on the contig
        imprecise: True when the annotation was inferred heuristically rather than from direct evidence
    """

    repeat_unit_ref_span: ReferenceLocus
    repeat_num_on_ref: int
    repeat_num_on_contig: int
    seq_shapes: Tuple[str, ...] = ()
    imprecise: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'seq_shapes', tuple(self.seq_shapes))


@dataclass(frozen=True)
class BreakpointComplication:
    """
    extra detail at a breakpoint which complicates a simple deletion/insertion interpretation.
    Sequences are given as their forward strand representation
    """

    inserted_sequence: str = ''
    homology: str = ''
    duplication: Optional[DuplicationAnnotation] = None

    def has_duplication_annotation(self) -> bool:
        return self.duplication is not None

    def __str__(self):
        result = 'inserted_sequence={} homology={}'.format(
            repr(self.inserted_sequence), repr(self.homology)
        )
        if self.duplication is not None:
            dup = self.duplication
            result += ' dup_repeat_unit={} repeat_numbers={}->{} seq_shapes={}{}'.format(
                dup.repeat_unit_ref_span,
                dup.repeat_num_on_ref,
                dup.repeat_num_on_contig,
                list(dup.seq_shapes),
                ' (imprecise)' if dup.imprecise else '',
            )
        return result


@dataclass(frozen=True)
class NovelAdjacency:
    """
    the consensus key for a breakpoint: two left-justified reference loci, how they are joined and
    the complications found at the junction. Equality and hashing are field-wise so that evidence from
    different contigs pointing to the same breakpoint is grouped together

    Note:
        the left locus is expected to end at or before the start of the right locus. This is checked
        when the adjacency is classified and never corrected
    """

    left_locus: ReferenceLocus
    right_locus: ReferenceLocus
    connection_type: str = CONNECTION_TYPE.SAME_STRAND
    complication: BreakpointComplication = field(default_factory=BreakpointComplication)
    inversion_orientation: Optional[str] = None

    def __post_init__(self):
        CONNECTION_TYPE.enforce(self.connection_type)
        if self.inversion_orientation is not None:
            INV_ORIENT.enforce(self.inversion_orientation)
            if self.connection_type != CONNECTION_TYPE.STRAND_SWITCH:
                raise ValueError(
                    'inversion orientation can only be given for strand switching adjacencies',
                    self.inversion_orientation,
                )

    @property
    def chr(self) -> str:
        return self.left_locus.chr

    @property
    def start(self) -> int:
        return self.left_locus.end

    @property
    def end(self) -> int:
        return self.right_locus.start

    @property
    def interchromosomal(self) -> bool:
        return self.left_locus.chr != self.right_locus.chr

    @property
    def key(self):
        return (self.left_locus.key, self.right_locus.key, self.connection_type)

    def __str__(self):
        return 'NovelAdjacency(left={} right={} connection={}{} {})'.format(
            self.left_locus,
            self.right_locus,
            self.connection_type,
            '/' + self.inversion_orientation if self.inversion_orientation else '',
            self.complication,
        )
