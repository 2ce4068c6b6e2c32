"""
holds the alignment evidence types: single alignments of a contig to the reference and the chimeric
(split) alignments built from consecutive pairs of them
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

import pysam

from .breakpoint import ReferenceLocus
from .constants import CIGAR, STRAND, reverse_complement
from .interval import Interval
from .util import logger

ContigKey = Tuple[str, str]
ContigAlignments = Dict[ContigKey, Tuple[Tuple['AlignmentRegion', ...], str]]

QUERY_ALIGNED_STATES = {CIGAR.M, CIGAR.I, CIGAR.EQ, CIGAR.X}
CLIPPING_STATES = {CIGAR.S, CIGAR.H}


@dataclass(frozen=True)
class AlignmentRegion:
    """
    a single contiguous mapping of part of an assembled contig to the reference

    Attributes:
        assembly_id: the assembly the contig was built in
        contig_id: the name of the contig
        reference_locus: where this part of the contig aligns on the reference
        forward_strand: False if the contig aligns to the reverse strand
        start_in_contig: first contig base in the alignment (1-based, contig orientation)
        end_in_contig: last contig base in the alignment (1-based, contig orientation)
        contig_length: total length of the contig
        mapping_quality: the mapping quality of the alignment
        cigar: the cigar string of the alignment
        mismatches: number of mismatches reported by the aligner
    """

    assembly_id: str
    contig_id: str
    reference_locus: ReferenceLocus
    forward_strand: bool
    start_in_contig: int
    end_in_contig: int
    contig_length: int
    mapping_quality: int
    cigar: str = ''
    mismatches: int = 0

    def __post_init__(self):
        if self.start_in_contig > self.end_in_contig:
            raise ValueError(
                'alignment start on the contig must not be after its end',
                self.start_in_contig,
                self.end_in_contig,
            )

    @property
    def key(self):
        return (
            self.assembly_id,
            self.contig_id,
            self.start_in_contig,
            self.end_in_contig,
            self.reference_locus.key,
            self.forward_strand,
            self.mapping_quality,
            self.contig_length,
            self.cigar,
            self.mismatches,
        )

    @property
    def reference_span(self) -> int:
        return len(self.reference_locus)

    @property
    def contig_interval(self) -> Interval:
        return Interval(self.start_in_contig, self.end_in_contig)

    @property
    def strand(self) -> str:
        return STRAND.POS if self.forward_strand else STRAND.NEG

    def to_packed_string(self) -> str:
        """
        compact representation used when recording this alignment as a mapping of inserted sequence

        Example:
            >>> region.to_packed_string()
            '51_100_1:1001-1050_+_50M50S_60_0'
        """
        return '_'.join(
            [
                str(self.start_in_contig),
                str(self.end_in_contig),
                str(self.reference_locus),
                self.strand,
                self.cigar,
                str(self.mapping_quality),
                str(self.mismatches),
            ]
        )

    @classmethod
    def from_read(cls, read, assembly_id: str) -> 'AlignmentRegion':
        """
        Args:
            read (pysam.AlignedSegment): an alignment of the contig to the reference
            assembly_id: the assembly the contig belongs to

        Note:
            contig coordinates include any leading clipping (soft or hard) and are reported wrt the
            original orientation of the contig, so they are flipped for reverse strand alignments
        """
        cigar = read.cigartuples or []
        leading_clip = 0
        for state, size in cigar:
            if state not in CLIPPING_STATES:
                break
            leading_clip += size
        aligned_length = sum([size for state, size in cigar if state in QUERY_ALIGNED_STATES])
        contig_length = sum(
            [size for state, size in cigar if state in QUERY_ALIGNED_STATES | CLIPPING_STATES]
        )
        start = leading_clip + 1
        end = leading_clip + aligned_length
        if read.is_reverse:
            start, end = contig_length - end + 1, contig_length - start + 1
        return cls(
            assembly_id=assembly_id,
            contig_id=read.query_name,
            reference_locus=ReferenceLocus(
                read.reference_name, read.reference_start + 1, read.reference_end
            ),
            forward_strand=not read.is_reverse,
            start_in_contig=start,
            end_in_contig=end,
            contig_length=contig_length,
            mapping_quality=read.mapping_quality,
            cigar=read.cigarstring or '',
            mismatches=read.get_tag('NM') if read.has_tag('NM') else 0,
        )


def overlap_on_contig(first: AlignmentRegion, second: AlignmentRegion) -> int:
    """
    the number of contig bases covered by both alignments

    Example:
        >>> overlap_on_contig(region(1, 100), region(91, 200))
        10
        >>> overlap_on_contig(region(1, 100), region(111, 200))
        0
    """
    overlap = Interval.intersection(first.contig_interval, second.contig_interval)
    return 0 if overlap is None else len(overlap)


@dataclass(frozen=True)
class ChimericAlignment:
    """
    a pair of alignments of the same contig which are adjacent on the contig but not on the reference.
    Any sequence between them which could only be aligned with low confidence is kept as insertion mappings
    """

    region_with_lower_coord_on_contig: AlignmentRegion
    region_with_higher_coord_on_contig: AlignmentRegion
    insertion_mappings: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'insertion_mappings', tuple(self.insertion_mappings))
        lower = self.region_with_lower_coord_on_contig
        higher = self.region_with_higher_coord_on_contig
        if (lower.assembly_id, lower.contig_id) != (higher.assembly_id, higher.contig_id):
            raise ValueError(
                'chimeric alignment regions must come from the same contig',
                (lower.assembly_id, lower.contig_id),
                (higher.assembly_id, higher.contig_id),
            )
        if lower.start_in_contig > higher.start_in_contig:
            raise ValueError(
                'regions of a chimeric alignment must be given in contig order',
                lower.start_in_contig,
                higher.start_in_contig,
            )

    @property
    def assembly_id(self) -> str:
        return self.region_with_lower_coord_on_contig.assembly_id

    @property
    def contig_id(self) -> str:
        return self.region_with_lower_coord_on_contig.contig_id

    @property
    def interchromosomal(self) -> bool:
        return (
            self.region_with_lower_coord_on_contig.reference_locus.chr
            != self.region_with_higher_coord_on_contig.reference_locus.chr
        )

    @property
    def sort_key(self):
        """
        orders evidence by assembly, contig and contig coordinates. The remaining content of both regions
        breaks ties so that only identical evidence compares equal
        """
        lower = self.region_with_lower_coord_on_contig
        higher = self.region_with_higher_coord_on_contig
        return (
            self.assembly_id,
            self.contig_id,
            lower.start_in_contig,
            higher.start_in_contig,
            lower.end_in_contig,
            higher.end_in_contig,
            lower.key,
            higher.key,
            self.insertion_mappings,
        )

    @classmethod
    def from_split_alignments(
        cls,
        regions: Iterable[AlignmentRegion],
        contig_sequence: str = '',
        min_mapping_quality: int = 60,
        min_alignment_length: int = 50,
    ) -> List['ChimericAlignment']:
        """
        Builds the chimeric alignments for a single contig from all of its alignments

        Args:
            regions: the alignments of a single contig
            contig_sequence: the sequence of the contig. If given, every alignment must report the same contig length
            min_mapping_quality: alignments below this mapping quality are not used as anchors
            min_alignment_length: alignments spanning less of the reference than this are not used as anchors

        Returns:
            one chimeric alignment per pair of consecutive anchoring alignments (in contig order).
            Alignments which cannot anchor a breakpoint but fall between two anchors are recorded
            as insertion mappings of the chimeric alignment they fall in

        Raises:
            ValueError: an alignment does not match the length of the contig sequence
        """
        regions = sorted(regions, key=lambda r: (r.start_in_contig, r.end_in_contig))
        if contig_sequence:
            for region in regions:
                if region.contig_length != len(contig_sequence):
                    raise ValueError(
                        'alignment does not match the contig sequence length',
                        region.contig_id,
                        region.contig_length,
                        len(contig_sequence),
                    )
        result = []
        anchor = None
        insertion_mappings: List[str] = []

        for region in regions:
            if (
                region.mapping_quality < min_mapping_quality
                or region.reference_span < min_alignment_length
            ):
                if anchor is not None:
                    insertion_mappings.append(region.to_packed_string())
                continue
            if anchor is not None:
                result.append(cls(anchor, region, insertion_mappings))
            anchor = region
            insertion_mappings = []
        return result


def load_contig_alignments(bamfile: str, assembly_id: str) -> ContigAlignments:
    """
    read the alignments of assembled contigs to the reference

    Args:
        bamfile: path to the bam file of contig alignments
        assembly_id: the id of the assembly the contigs were built in

    Returns:
        the alignments and the sequence of each contig keyed by the assembly and contig ids
    """
    regions: Dict[ContigKey, List[AlignmentRegion]] = {}
    sequences: Dict[ContigKey, str] = {}
    logger.info(f'reading: {bamfile}')
    with pysam.AlignmentFile(bamfile, 'rb') as fh:
        for read in fh.fetch(until_eof=True):
            if read.is_unmapped or read.is_secondary:
                continue
            key = (assembly_id, read.query_name)
            regions.setdefault(key, []).append(AlignmentRegion.from_read(read, assembly_id))
            if not read.is_supplementary and read.query_sequence:
                sequences[key] = (
                    reverse_complement(read.query_sequence)
                    if read.is_reverse
                    else read.query_sequence
                )
    logger.info(f'read alignments for {len(regions)} contigs')
    return {key: (tuple(regs), sequences.get(key, '')) for key, regs in regions.items()}
