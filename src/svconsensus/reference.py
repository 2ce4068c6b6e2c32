"""
Accessors for reference sequence. Any object with a ``fetch(chr, start, end)`` method returning the bases
of the 1-based closed interval can be used to build alleles
"""
import re
from typing import Dict

import pysam
from Bio import SeqIO
from Bio.SeqRecord import SeqRecord

from .util import logger

ReferenceGenome = Dict[str, SeqRecord]


def check_fetched(sequence: str, chr: str, start: int, end: int) -> str:
    """
    Raises:
        ValueError: the interval runs past the end of the chromosome
    """
    if len(sequence) != end - start + 1:
        raise ValueError(
            'reference interval is outside the chromosome', chr, start, end, len(sequence)
        )
    return sequence


def load_reference_genome(*filepaths: str) -> ReferenceGenome:
    """
    Args:
        filepaths: the paths to the files containing the input fasta genomes

    Returns:
        a dictionary representing the sequences in the fasta file
    """
    reference_genome = {}
    for filename in filepaths:
        logger.info(f'loading: {filename}')
        with open(filename, 'r') as fh:
            for chrom, seq in SeqIO.to_dict(SeqIO.parse(fh, 'fasta')).items():
                if chrom in reference_genome:
                    raise KeyError('Duplicate chromosome name', chrom, filename)
                reference_genome[chrom] = seq

    names = list(reference_genome.keys())

    # to fix hg38 issues
    for template_name in names:
        if template_name.startswith('chr'):
            truncated = re.sub('^chr', '', template_name)
            if truncated in reference_genome:
                raise KeyError(
                    'template names {} and {} are considered equal but both have been defined in the reference'
                    'loaded'.format(template_name, truncated)
                )
            reference_genome.setdefault(truncated, reference_genome[template_name].upper())
        else:
            prefixed = 'chr' + template_name
            if prefixed in reference_genome:
                raise KeyError(
                    'template names {} and {} are considered equal but both have been defined in the reference'
                    'loaded'.format(template_name, prefixed)
                )
            reference_genome.setdefault(prefixed, reference_genome[template_name].upper())
        reference_genome[template_name] = reference_genome[template_name].upper()

    return reference_genome


class ReferenceGenomeAccessor:
    """
    reference access over sequences held in memory
    """

    def __init__(self, reference_genome: ReferenceGenome):
        self.reference_genome = reference_genome

    def fetch(self, chr: str, start: int, end: int) -> str:
        """
        Args:
            chr: the chromosome
            start: first position (1-based, inclusive)
            end: last position (1-based, inclusive)

        Raises:
            KeyError: the chromosome is not in the reference
            ValueError: the interval is not within the chromosome
        """
        if start < 1 or end < start:
            raise ValueError('invalid reference interval', chr, start, end)
        return check_fetched(str(self.reference_genome[chr].seq[start - 1 : end]), chr, start, end)


class FastaReference:
    """
    reference access backed by an indexed fasta file. Sequence is read from disk on demand
    """

    def __init__(self, filename: str):
        self.filename = filename
        self.fh = pysam.FastaFile(filename)

    def fetch(self, chr: str, start: int, end: int) -> str:
        """
        Args:
            chr: the chromosome
            start: first position (1-based, inclusive)
            end: last position (1-based, inclusive)
        """
        if start < 1 or end < start:
            raise ValueError('invalid reference interval', chr, start, end)
        return check_fetched(self.fh.fetch(chr, start - 1, end).upper(), chr, start, end)

    def close(self):
        self.fh.close()

    def __enter__(self):
        return self

    def __exit__(self, *pos):
        self.close()
