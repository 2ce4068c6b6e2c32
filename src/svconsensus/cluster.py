"""
Groups chimeric alignment evidence into consensus clusters which share the same novel adjacency
"""
import itertools
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .alignment import AlignmentRegion, ChimericAlignment
from .breakpoint import NovelAdjacency
from .config import DiscoverySettings
from .util import logger

Clusters = Dict[NovelAdjacency, Tuple[ChimericAlignment, ...]]
Normalizer = Callable[[ChimericAlignment, str], NovelAdjacency]
Splitter = Callable[[Sequence[AlignmentRegion], str], List[ChimericAlignment]]


def filter_chimeric_contigs(contigs: Mapping) -> Dict:
    """
    drop any contig with fewer than two alignments. These cannot support a breakpoint
    """
    result = {}
    for key, (regions, sequence) in contigs.items():
        if len(regions) > 1:
            result[key] = (regions, sequence)
        else:
            logger.debug(f'dropping contig {key} with {len(regions)} alignment(s)')
    return result


def default_splitter(settings: Optional[DiscoverySettings] = None) -> Splitter:
    settings = settings if settings is not None else DiscoverySettings()

    def splitter(regions, contig_sequence):
        return ChimericAlignment.from_split_alignments(
            regions,
            contig_sequence,
            min_mapping_quality=settings.min_mapping_quality,
            min_alignment_length=settings.min_alignment_length,
        )

    return splitter


def _canonical(evidence: Iterable[ChimericAlignment]) -> Tuple[ChimericAlignment, ...]:
    return tuple(sorted(evidence, key=lambda ca: ca.sort_key))


def group_by_novel_adjacency(
    contigs: Mapping,
    normalizer: Normalizer,
    splitter: Optional[Splitter] = None,
) -> Clusters:
    """
    Args:
        contigs: the alignments and the sequence of each contig keyed by the contig identity
        normalizer: produces the left-justified novel adjacency of a chimeric alignment given the contig sequence
        splitter: builds the chimeric alignments of a contig from its alignments and sequence. Contigs
            the splitter rejects with a ValueError are dropped

    Returns:
        the evidence supporting each distinct novel adjacency. The order of the input contigs does not affect the result
    """
    if splitter is None:
        splitter = default_splitter()
    groups: Dict[NovelAdjacency, List[ChimericAlignment]] = {}
    for key, (regions, sequence) in filter_chimeric_contigs(contigs).items():
        try:
            chimeric_alignments = splitter(regions, sequence)
        except ValueError as err:
            logger.warning(f'dropping contig {key} as bad input {err}')
            continue
        for chimeric_alignment in chimeric_alignments:
            novel_adjacency = normalizer(chimeric_alignment, sequence)
            groups.setdefault(novel_adjacency, []).append(chimeric_alignment)
    logger.info(f'grouped evidence into {len(groups)} novel adjacencies')
    return {novel_adjacency: _canonical(evidence) for novel_adjacency, evidence in groups.items()}


def merge_clusters(*partials: Clusters) -> Clusters:
    """
    merge groupings computed independently (ex. on separate partitions of the contigs)

    Note:
        the merge is commutative and associative: evidence is always stored in a canonical order
    """
    merged: Dict[NovelAdjacency, List[ChimericAlignment]] = {}
    for partial in partials:
        for novel_adjacency, evidence in partial.items():
            merged.setdefault(novel_adjacency, []).extend(evidence)
    return {novel_adjacency: _canonical(evidence) for novel_adjacency, evidence in merged.items()}


def group_partitions(
    partitions: Iterable[Mapping],
    normalizer: Normalizer,
    splitter: Optional[Splitter] = None,
) -> Clusters:
    """
    group each partition of contigs independently and then merge the results
    """
    clusters = merge_clusters(
        *[group_by_novel_adjacency(part, normalizer, splitter) for part in partitions]
    )
    logger.info(
        f'merged {count_evidence(clusters)} chimeric alignments into {len(clusters)} novel adjacencies'
    )
    return clusters


def count_evidence(clusters: Clusters) -> int:
    return len(list(itertools.chain.from_iterable(clusters.values())))
