"""
module responsible for small utility functions and constants used throughout the svconsensus package
"""
import re

from Bio.Seq import Seq

PROGNAME: str = 'svconsensus'


class Namespace:
    """
    Namespace to hold module constants. Subclasses define the members as class attributes

    Example:
        >>> class THINGS(Namespace):
        ...     THING = 1
        ...     OTHERTHING = 2
        >>> THINGS.values()
        [1, 2]
    """

    @classmethod
    def keys(cls):
        """
        get the attribute keys as a list
        """
        return [
            k
            for k, v in vars(cls).items()
            if not k.startswith('_') and not isinstance(v, (classmethod, staticmethod))
        ]

    @classmethod
    def values(cls):
        """
        get the attribute values as a list
        """
        return [getattr(cls, k) for k in cls.keys()]

    @classmethod
    def enforce(cls, value):
        """
        checks that the current namespace has a given value

        Returns:
            the input value

        Raises:
            KeyError: the value did not exist

        Example:
            >>> THINGS.enforce(1)
            1
            >>> THINGS.enforce(3)
            Traceback (most recent call last):
            ....
        """
        if value not in cls.values():
            raise KeyError('value {0} is not a valid member of '.format(repr(value)), cls.values())
        return value


INFO_FIELD_ARRAY_SEPARATOR: str = ','
"""separator used to join multi-valued attributes. Consumed by downstream variant-format tooling"""

VARIANT_ID_FIELD_SEPARATOR: str = '_'
"""separator used between the fields of a variant identifier"""


def reverse_complement(s: str) -> str:
    """
    wrapper for the Bio.Seq reverse_complement method

    Args:
        s: the input DNA sequence

    Returns:
        str: the reverse complement of the input sequence

    Warning:
        assumes the input is a DNA sequence

    Example:
        >>> reverse_complement('ATCCGGT')
        'ACCGGAT'
    """
    input_string = str(s)
    if not re.match('^[A-Za-z]*$', input_string):
        raise ValueError('unexpected sequence format. cannot reverse complement', input_string)
    return str(Seq(input_string).reverse_complement())


class STRAND(Namespace):
    """
    holds controlled vocabulary for allowed strand values

    Attributes:
        POS: the positive/forward strand
        NEG: the negative/reverse strand
    """

    POS: str = '+'
    NEG: str = '-'


class CONNECTION_TYPE(Namespace):
    """
    holds controlled vocabulary for how the two ends of a novel adjacency are joined

    Attributes:
        SAME_STRAND: both sides of the junction are read from the same reference strand
        STRAND_SWITCH: the junction switches from one reference strand to the other
    """

    SAME_STRAND: str = 'same strand'
    STRAND_SWITCH: str = 'strand switch'


class INV_ORIENT(Namespace):
    """
    holds controlled vocabulary for the junction orientation of strand switching adjacencies

    Attributes:
        FIVE_TO_FIVE: the 5' ends of the two reference segments are joined
        THREE_TO_THREE: the 3' ends of the two reference segments are joined
    """

    FIVE_TO_FIVE: str = 'INV55'
    THREE_TO_THREE: str = 'INV33'


class SVTYPE(Namespace):
    """
    holds controlled vocabulary for the structural variant types which can be called from a consensus cluster

    Attributes:
        INS: insertion
        DUP: tandem duplication
        DEL: deletion
        INV: inversion
    """

    INS: str = 'INS'
    DUP: str = 'DUP'
    DEL: str = 'DEL'
    INV: str = 'INV'


class CIGAR(Namespace):
    """
    Enum-like. For readable cigar values

    - ``M``: alignment match (can be a sequence match or mismatch)
    - ``I``: insertion to the reference
    - ``D``: deletion from the reference
    - ``N``: skipped region from the reference
    - ``S``: soft clipping (clipped sequences present in SEQ)
    - ``H``: hard clipping (clipped sequences NOT present in SEQ)
    - ``P``: padding (silent deletion from padded reference)
    - ``EQ``: sequence match (=)
    - ``X``: sequence mismatch

    note: descriptions are taken from the `samfile documentation <https://samtools.github.io/hts-specs/SAMv1.pdf>`_
    """

    M: int = 0
    I: int = 1  # noqa
    D: int = 2
    N: int = 3
    S: int = 4
    H: int = 5
    P: int = 6
    EQ: int = 7
    X: int = 8


SYMBOLIC_ALT_ALLELE = {
    SVTYPE.INS: '<INS>',
    SVTYPE.DUP: '<DUP:TANDEM>',
    SVTYPE.DEL: '<DEL>',
    SVTYPE.INV: '<INV>',
}
"""symbolic alternate allele used for each structural variant type"""


DUP_TANDEM_ID_PREFIX: str = 'DUP_TANDEM'


class INFO(Namespace):
    """
    attribute keys of the output variant records. These are fixed for downstream compatibility
    """

    SVTYPE: str = 'SVTYPE'
    SVLEN: str = 'SVLEN'
    END: str = 'END'
    INSERTED_SEQUENCE: str = 'INSERTED_SEQUENCE'
    HOMOLOGY: str = 'HOMOLOGY'
    HOMOLOGY_LENGTH: str = 'HOMOLOGY_LENGTH'
    DUP_REPEAT_UNIT_REF_SPAN: str = 'DUP_REPEAT_UNIT_REF_SPAN'
    DUP_SEQ_SHAPES: str = 'DUP_SEQ_SHAPES'
    DUPLICATION_NUMBERS: str = 'DUPLICATION_NUMBERS'
    DUP_ANNOTATIONS_IMPRECISE: str = 'DUP_ANNOTATIONS_IMPRECISE'
    TOTAL_MAPPINGS: str = 'TOTAL_MAPPINGS'
    HQ_MAPPINGS: str = 'HQ_MAPPINGS'
    MAPPING_QUALITIES: str = 'MAPPING_QUALITIES'
    ALIGN_LENGTHS: str = 'ALIGN_LENGTHS'
    MAX_ALIGN_LENGTH: str = 'MAX_ALIGN_LENGTH'
    ASSEMBLY_IDS: str = 'ASSEMBLY_IDS'
    CONTIG_IDS: str = 'CONTIG_IDS'
    INSERTED_SEQUENCE_MAPPINGS: str = 'INSERTED_SEQUENCE_MAPPINGS'
    INV55: str = 'INV55'
    INV33: str = 'INV33'


class COLUMNS(Namespace):
    """
    Column names for the fixed (non-attribute) fields of the tabbed output files
    """

    chrom: str = 'chrom'
    pos: str = 'pos'
    id: str = 'id'
    ref: str = 'ref'
    alt: str = 'alt'


def sort_columns(input_columns):
    order = {}
    for i, col in enumerate(list(COLUMNS.values()) + list(INFO.values())):
        order[col] = i
    temp = sorted([c for c in input_columns if c in order], key=lambda x: order[x])
    temp = temp + sorted([c for c in input_columns if c not in order])
    return temp
