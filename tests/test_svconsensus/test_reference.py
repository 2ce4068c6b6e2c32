import pytest
from svconsensus.reference import FastaReference, ReferenceGenomeAccessor, load_reference_genome


@pytest.fixture
def fasta_file(tmp_path):
    filename = tmp_path / 'reference.fa'
    filename.write_text('>chr1\nacgtACGTNN\nGGCC\n>2\nTTTTAAAA\n')
    return str(filename)


class TestLoadReferenceGenome:
    def test_chr_prefix_aliases(self, fasta_file):
        reference_genome = load_reference_genome(fasta_file)
        assert str(reference_genome['chr1'].seq) == 'ACGTACGTNNGGCC'
        assert str(reference_genome['1'].seq) == 'ACGTACGTNNGGCC'
        assert str(reference_genome['chr2'].seq) == 'TTTTAAAA'

    def test_duplicate_chromosome(self, fasta_file):
        with pytest.raises(KeyError):
            load_reference_genome(fasta_file, fasta_file)


class TestReferenceGenomeAccessor:
    def test_fetch(self, fasta_file):
        reference = ReferenceGenomeAccessor(load_reference_genome(fasta_file))
        assert reference.fetch('1', 1, 1) == 'A'
        assert reference.fetch('chr1', 5, 8) == 'ACGT'

    def test_missing_chromosome(self, fasta_file):
        reference = ReferenceGenomeAccessor(load_reference_genome(fasta_file))
        with pytest.raises(KeyError):
            reference.fetch('3', 1, 1)

    def test_bad_interval(self, fasta_file):
        reference = ReferenceGenomeAccessor(load_reference_genome(fasta_file))
        with pytest.raises(ValueError):
            reference.fetch('1', 0, 1)


class TestFastaReference:
    def test_fetch(self, fasta_file):
        with FastaReference(fasta_file) as reference:
            assert reference.fetch('chr1', 1, 1) == 'A'
            assert reference.fetch('chr1', 9, 12) == 'NNGG'
            assert reference.fetch('2', 5, 8) == 'AAAA'

    def test_past_chromosome_end(self, fasta_file):
        with FastaReference(fasta_file) as reference:
            with pytest.raises(ValueError):
                reference.fetch('2', 20, 20)
            with pytest.raises(ValueError):
                reference.fetch('2', 7, 10)


class TestPastChromosomeEnd:
    def test_in_memory(self, fasta_file):
        reference = ReferenceGenomeAccessor(load_reference_genome(fasta_file))
        with pytest.raises(ValueError):
            reference.fetch('2', 100, 100)
        with pytest.raises(ValueError):
            reference.fetch('2', 8, 9)
        assert reference.fetch('2', 8, 8) == 'A'
