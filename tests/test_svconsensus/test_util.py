import pandas as pd
import pytest
from svconsensus.util import cast, cast_boolean, output_tabbed_file
from svconsensus.variant import build_variant

from .mock import MockReference, mock_adjacency, mock_evidence


class TestCast:
    def test_boolean(self):
        assert cast_boolean('yes')
        assert not cast('f', bool)
        with pytest.raises(TypeError):
            cast_boolean('maybe')

    def test_int(self):
        assert cast('1', int) == 1


def test_output_tabbed_file(tmp_path):
    reference = MockReference(**{'1': 'A' * 2000})
    evidence = [mock_evidence(contig_id='c1', insertion_mappings=['m1'])]
    variants = [
        build_variant(mock_adjacency(1000, 1500), evidence, reference),
        build_variant(mock_adjacency(1200, 1200, inserted_sequence='CC'), evidence, reference),
    ]
    filename = str(tmp_path / 'output' / 'variants.tab')
    output_tabbed_file(variants, filename)
    df = pd.read_csv(filename, sep='\t', dtype=str, keep_default_na=False)
    assert list(df.columns[:5]) == ['chrom', 'pos', 'id', 'ref', 'alt']
    assert df.shape[0] == 2
    assert list(df['SVTYPE']) == ['DEL', 'INS']
    assert list(df['INSERTED_SEQUENCE']) == ['None', 'CC']
