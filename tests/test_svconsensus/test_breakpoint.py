import pytest
from svconsensus.breakpoint import (
    BreakpointComplication,
    DuplicationAnnotation,
    NovelAdjacency,
    ReferenceLocus,
)
from svconsensus.constants import CONNECTION_TYPE, INV_ORIENT

from .mock import mock_adjacency


class TestReferenceLocus:
    def test___eq__(self):
        assert ReferenceLocus('1', 1) != None  # noqa: E711
        assert ReferenceLocus('1', 1) == ReferenceLocus('1', 1, 1)
        assert ReferenceLocus('1', 1) != ReferenceLocus('2', 1)

    def test___hash__(self):
        temp = set()
        temp.add(ReferenceLocus('1', 1, 2))
        temp.add(ReferenceLocus('1', 1, 2))
        temp.add(ReferenceLocus('1', 1, 1))
        assert len(temp) == 2

    def test___len__(self):
        assert len(ReferenceLocus('1', 10, 19)) == 10

    def test_start_after_end_error(self):
        with pytest.raises(AttributeError):
            ReferenceLocus('1', 10, 9)

    def test___str__(self):
        assert str(ReferenceLocus('chr1', 10, 20)) == 'chr1:10-20'


class TestBreakpointComplication:
    def test_has_duplication_annotation(self):
        assert not BreakpointComplication().has_duplication_annotation()
        dup = DuplicationAnnotation(ReferenceLocus('1', 1, 10), 1, 2)
        assert BreakpointComplication(duplication=dup).has_duplication_annotation()

    def test_seq_shapes_stored_as_tuple(self):
        dup = DuplicationAnnotation(ReferenceLocus('1', 1, 10), 1, 2, seq_shapes=['10M', '10M'])
        assert dup.seq_shapes == ('10M', '10M')
        hash(dup)


class TestNovelAdjacency:
    def test_structural_equality(self):
        first = mock_adjacency(1000, 1000, inserted_sequence='ACGT', homology='A')
        second = mock_adjacency(1000, 1000, inserted_sequence='ACGT', homology='A')
        assert first is not second
        assert first == second
        assert hash(first) == hash(second)
        assert len({first: 1, second: 2}) == 1

    def test_complication_differences_are_different_keys(self):
        first = mock_adjacency(1000, 1000, inserted_sequence='ACGT')
        second = mock_adjacency(1000, 1000, inserted_sequence='ACGA')
        third = mock_adjacency(1000, 1000, inserted_sequence='ACGT', duplication=True)
        assert len({first, second, third}) == 3

    def test_start_and_end(self):
        adjacency = NovelAdjacency(ReferenceLocus('1', 90, 100), ReferenceLocus('1', 200, 210))
        assert adjacency.chr == '1'
        assert adjacency.start == 100
        assert adjacency.end == 200
        assert not adjacency.interchromosomal

    def test_out_of_order_is_not_corrected(self):
        adjacency = mock_adjacency(500, 480)
        assert adjacency.start == 500
        assert adjacency.end == 480

    def test_interchromosomal(self):
        assert mock_adjacency(100, 200, end_chr='X').interchromosomal

    def test_bad_connection_type(self):
        with pytest.raises(KeyError):
            NovelAdjacency(ReferenceLocus('1', 1), ReferenceLocus('1', 5), connection_type='5to3')

    def test_inversion_orientation_requires_strand_switch(self):
        with pytest.raises(ValueError):
            mock_adjacency(100, 200, inversion_orientation=INV_ORIENT.THREE_TO_THREE)
        adjacency = mock_adjacency(
            100,
            200,
            connection_type=CONNECTION_TYPE.STRAND_SWITCH,
            inversion_orientation=INV_ORIENT.THREE_TO_THREE,
        )
        assert adjacency.inversion_orientation == 'INV33'

    def test___str__(self):
        adjacency = mock_adjacency(1000, 1000, inserted_sequence='ACGT', duplication=True)
        description = str(adjacency)
        assert '1:990-1000' in description
        assert 'ACGT' in description
        assert '1->2' in description
