from svconsensus.alignment import AlignmentRegion, ChimericAlignment
from svconsensus.breakpoint import (
    BreakpointComplication,
    DuplicationAnnotation,
    NovelAdjacency,
    ReferenceLocus,
)
from svconsensus.constants import CONNECTION_TYPE


class MockReference:
    """
    reference accessor over in-memory strings. Records every request
    """

    def __init__(self, **sequences):
        self.sequences = sequences
        self.requests = []

    def fetch(self, chr, start, end):
        self.requests.append((chr, start, end))
        return self.sequences[chr][start - 1 : end]


class FailingReference:
    def __init__(self, error):
        self.error = error

    def fetch(self, chr, start, end):
        raise self.error


def mock_region(
    start_in_contig,
    end_in_contig,
    ref_start=1000,
    ref_span=None,
    chr='1',
    mapping_quality=60,
    assembly_id='asm1',
    contig_id='contig1',
    forward_strand=True,
    contig_length=1000,
    cigar='',
):
    if ref_span is None:
        ref_span = end_in_contig - start_in_contig + 1
    return AlignmentRegion(
        assembly_id=assembly_id,
        contig_id=contig_id,
        reference_locus=ReferenceLocus(chr, ref_start, ref_start + ref_span - 1),
        forward_strand=forward_strand,
        start_in_contig=start_in_contig,
        end_in_contig=end_in_contig,
        contig_length=contig_length,
        mapping_quality=mapping_quality,
        cigar=cigar,
    )


def mock_evidence(
    mapping_qualities=(60, 60),
    ref_spans=(100, 100),
    overlap=0,
    assembly_id='asm1',
    contig_id='contig1',
    insertion_mappings=(),
):
    """
    build a chimeric alignment with the given summary values. The two alignments are placed next to
    each other on the contig with the requested overlap
    """
    first_end = 100
    second_start = first_end - overlap + 1
    lower = mock_region(
        1,
        first_end,
        ref_start=1000,
        ref_span=ref_spans[0],
        mapping_quality=mapping_qualities[0],
        assembly_id=assembly_id,
        contig_id=contig_id,
    )
    higher = mock_region(
        second_start,
        second_start + 99,
        ref_start=5000,
        ref_span=ref_spans[1],
        mapping_quality=mapping_qualities[1],
        assembly_id=assembly_id,
        contig_id=contig_id,
    )
    return ChimericAlignment(lower, higher, insertion_mappings)


def mock_adjacency(
    start,
    end,
    chr='1',
    connection_type=CONNECTION_TYPE.SAME_STRAND,
    inserted_sequence='',
    homology='',
    duplication=False,
    inversion_orientation=None,
    end_chr=None,
):
    dup = None
    if duplication:
        dup = DuplicationAnnotation(
            repeat_unit_ref_span=ReferenceLocus(chr, start + 1, start + 20),
            repeat_num_on_ref=1,
            repeat_num_on_contig=2,
            seq_shapes=('20M', '20M'),
        )
    return NovelAdjacency(
        left_locus=ReferenceLocus(chr, start - 10, start),
        right_locus=ReferenceLocus(end_chr or chr, end, end + 10),
        connection_type=connection_type,
        complication=BreakpointComplication(
            inserted_sequence=inserted_sequence, homology=homology, duplication=dup
        ),
        inversion_orientation=inversion_orientation,
    )
