"""
Builds the variant record of a consensus cluster: the alleles, the complication attributes and the
summary statistics of the supporting evidence
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .alignment import ChimericAlignment, overlap_on_contig
from .breakpoint import NovelAdjacency
from .config import DiscoverySettings
from .constants import COLUMNS, INFO, INFO_FIELD_ARRAY_SEPARATOR
from .error import ClassificationError, ValidationError
from .svtype import SvType, check_breakpoint_order, classify
from .util import logger


@dataclass(frozen=True)
class VariantRecord:
    """
    a consensus structural variant call. Coordinates are 1-based
    """

    chrom: str
    pos: int
    end: int
    id: str
    ref: str
    alt: str
    info: Dict[str, object] = field(default_factory=dict, hash=False)

    @property
    def svtype(self) -> str:
        return self.info[INFO.SVTYPE]  # type: ignore

    def flatten(self) -> Dict:
        """
        returns the record as a single level dictionary of the fixed fields and the attributes
        """
        row = {
            COLUMNS.chrom: self.chrom,
            COLUMNS.pos: self.pos,
            COLUMNS.id: self.id,
            COLUMNS.ref: self.ref,
            COLUMNS.alt: self.alt,
        }
        row.update(self.info)
        return row


def produce_alleles(novel_adjacency: NovelAdjacency, reference, sv_type: SvType) -> List[str]:
    """
    Args:
        novel_adjacency: the consensus breakpoint
        reference: accessor with a ``fetch(chr, start, end)`` method using 1-based closed coordinates
        sv_type: the inferred type of the variant

    Returns:
        the reference allele (the base at the start of the left locus) and the symbolic alternate allele
    """
    chrom = novel_adjacency.left_locus.chr
    start = novel_adjacency.left_locus.start
    ref_allele = reference.fetch(chrom, start, start)
    return [ref_allele, sv_type.alt_allele]


def complication_attributes(novel_adjacency: NovelAdjacency) -> Dict[str, object]:
    """
    Converts the complications at the breakpoint to variant attributes. Only applicable attributes are added
    """
    complication = novel_adjacency.complication
    attributes: Dict[str, object] = {}

    if complication.inserted_sequence:
        attributes[INFO.INSERTED_SEQUENCE] = complication.inserted_sequence

    if complication.homology:
        attributes[INFO.HOMOLOGY] = complication.homology
        attributes[INFO.HOMOLOGY_LENGTH] = len(complication.homology)

    if complication.has_duplication_annotation():
        dup = complication.duplication
        attributes[INFO.DUP_REPEAT_UNIT_REF_SPAN] = str(dup.repeat_unit_ref_span)
        if dup.seq_shapes:
            attributes[INFO.DUP_SEQ_SHAPES] = INFO_FIELD_ARRAY_SEPARATOR.join(dup.seq_shapes)
        attributes[INFO.DUPLICATION_NUMBERS] = INFO_FIELD_ARRAY_SEPARATOR.join(
            [str(dup.repeat_num_on_ref), str(dup.repeat_num_on_contig)]
        )
        if dup.imprecise:
            attributes[INFO.DUP_ANNOTATIONS_IMPRECISE] = True
    return attributes


@dataclass(frozen=True)
class BreakpointEvidenceAnnotations:
    """
    the per-evidence values which are summarized in the variant attributes

    Attributes:
        min_mq: the lower mapping quality of the two alignments
        min_al: the shorter reference span of the two alignments less their overlap on the contig
        assembly_id: the assembly the contig was built in
        contig_id: the contig the evidence came from
        insertion_mappings: packed mappings of the sequence inserted between the two alignments
    """

    min_mq: int
    min_al: int
    assembly_id: str
    contig_id: str
    insertion_mappings: Tuple[str, ...] = ()

    @classmethod
    def from_chimeric_alignment(
        cls, chimeric_alignment: ChimericAlignment
    ) -> 'BreakpointEvidenceAnnotations':
        lower = chimeric_alignment.region_with_lower_coord_on_contig
        higher = chimeric_alignment.region_with_higher_coord_on_contig
        return cls(
            min_mq=min(lower.mapping_quality, higher.mapping_quality),
            min_al=min(lower.reference_span, higher.reference_span)
            - overlap_on_contig(lower, higher),
            assembly_id=lower.assembly_id,
            contig_id=lower.contig_id,
            insertion_mappings=tuple(chimeric_alignment.insertion_mappings),
        )


def evidence_attributes(
    evidence: Iterable[ChimericAlignment], high_mapping_quality_threshold: int = 60
) -> Dict[str, object]:
    """
    Summarize the evidence supporting a consensus breakpoint

    Args:
        evidence: the chimeric alignments supporting the breakpoint, in any order
        high_mapping_quality_threshold: the mapping quality counted as a high quality mapping

    Note:
        evidence is sorted by assembly and contig ids (then by contig coordinates) before summarizing so that
        the lists are reproducible regardless of the order the evidence was collected in

    Note:
        a mapping is counted as high quality only when its minimum mapping quality is exactly equal to
        the threshold
    """
    annotations = [
        BreakpointEvidenceAnnotations.from_chimeric_alignment(ca)
        for ca in sorted(evidence, key=lambda ca: ca.sort_key)
    ]

    attributes: Dict[str, object] = {
        INFO.TOTAL_MAPPINGS: len(annotations),
        INFO.HQ_MAPPINGS: len(
            [a for a in annotations if a.min_mq == high_mapping_quality_threshold]
        ),
        INFO.MAPPING_QUALITIES: INFO_FIELD_ARRAY_SEPARATOR.join(
            [str(a.min_mq) for a in annotations]
        ),
        INFO.ALIGN_LENGTHS: INFO_FIELD_ARRAY_SEPARATOR.join([str(a.min_al) for a in annotations]),
        INFO.MAX_ALIGN_LENGTH: max([a.min_al for a in annotations], default=0),
        INFO.ASSEMBLY_IDS: INFO_FIELD_ARRAY_SEPARATOR.join([a.assembly_id for a in annotations]),
        INFO.CONTIG_IDS: INFO_FIELD_ARRAY_SEPARATOR.join([a.contig_id for a in annotations]),
    }

    insertion_mappings = sorted([m for a in annotations for m in a.insertion_mappings])
    if insertion_mappings:
        attributes[INFO.INSERTED_SEQUENCE_MAPPINGS] = INFO_FIELD_ARRAY_SEPARATOR.join(
            insertion_mappings
        )
    return attributes


def build_variant(
    novel_adjacency: NovelAdjacency,
    evidence: Iterable[ChimericAlignment],
    reference,
    settings: Optional[DiscoverySettings] = None,
) -> VariantRecord:
    """
    Produce the variant record for a consensus breakpoint and its supporting evidence

    Args:
        novel_adjacency: the consensus breakpoint
        evidence: the chimeric alignments which support the breakpoint
        reference: accessor with a ``fetch(chr, start, end)`` method
        settings: the discovery settings. Defaults are used if not given

    Raises:
        ValidationError: the left breakpoint is to the right of the right breakpoint
        ClassificationError: the type of the variant could not be inferred
    """
    settings = settings if settings is not None else DiscoverySettings()
    check_breakpoint_order(novel_adjacency)

    sv_type = classify(novel_adjacency)
    ref, alt = produce_alleles(novel_adjacency, reference, sv_type)

    info: Dict[str, object] = {
        INFO.END: novel_adjacency.end,
        INFO.SVTYPE: sv_type.kind,
        INFO.SVLEN: sv_type.sv_length,
    }
    info.update(sv_type.attributes)
    info.update(complication_attributes(novel_adjacency))
    info.update(
        evidence_attributes(
            evidence, high_mapping_quality_threshold=settings.high_mapping_quality_threshold
        )
    )
    return VariantRecord(
        chrom=novel_adjacency.chr,
        pos=novel_adjacency.start,
        end=novel_adjacency.end,
        id=sv_type.variant_id,
        ref=ref,
        alt=alt,
        info=info,
    )


def call_variants(
    clusters: Mapping[NovelAdjacency, Iterable[ChimericAlignment]],
    reference,
    settings: Optional[DiscoverySettings] = None,
) -> Tuple[List[VariantRecord], List[Tuple[NovelAdjacency, Exception]]]:
    """
    build a variant for every consensus cluster, in order of chromosome, start and end. A failure in one
    cluster (including a reference accessor which cannot read the allele) does not stop the others

    Returns:
        the variant records and the (novel adjacency, error) pairs of the clusters that failed

    Raises:
        InternalInvariantViolation: the classifier produced an unknown type
    """
    settings = settings if settings is not None else DiscoverySettings()
    variants = []
    failures = []
    for novel_adjacency in sorted(
        clusters, key=lambda na: (na.chr, na.start, na.end, str(na))
    ):
        try:
            variants.append(
                build_variant(novel_adjacency, clusters[novel_adjacency], reference, settings)
            )
        except (ValidationError, ClassificationError, OSError, KeyError, ValueError) as err:
            logger.error(f'failed to build a variant for {novel_adjacency}: {repr(err)}')
            failures.append((novel_adjacency, err))
    logger.info(f'built {len(variants)} variants ({len(failures)} clusters failed)')
    return variants, failures
