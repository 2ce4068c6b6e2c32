from typing import Optional


class Interval:
    """
    an integer interval with 1-based closed coordinates
    """

    def __init__(self, start: int, end: Optional[int] = None):
        """
        Args:
            start: the start of the interval (inclusive)
            end: the end of the interval (inclusive). Defaults to the start
        """
        self.start = int(start)
        self.end = int(end) if end is not None else self.start
        if self.start > self.end:
            raise AttributeError('interval start > end is not allowed', self.start, self.end)

    def __getitem__(self, index):
        try:
            index = int(index)
        except ValueError:
            raise IndexError('index input accessor must be an integer', index)
        if index == 0:
            return self.start
        elif index == 1:
            return self.end
        raise IndexError('index input accessor is out of bounds: 1 or 2 only', index)

    @classmethod
    def intersection(cls, *intervals):
        """
        returns None if there is no intersection

        Example:
            >>> Interval.intersection((1, 10), (2, 8), (7, 15))
            Interval(7, 8)
            >>> Interval.intersection((1, 2), (5, 6))
            None
        """
        if not intervals:
            raise AttributeError('cannot compute the intersection of an empty set of intervals')
        low = max(i[0] for i in intervals)
        high = min(i[1] for i in intervals)
        if low > high:
            return None
        return Interval(low, high)

    def __len__(self):
        """
        the length of the interval

        Example:
            >>> len(Interval(1, 11))
            11
        """
        return Interval.length(self)

    def length(self) -> int:
        return self[1] - self[0] + 1

    def __repr__(self):
        return '{}({}, {})'.format(self.__class__.__name__, self.start, self.end)

    def __eq__(self, other):
        try:
            if self[0] != other[0] or self[1] != other[1]:
                return False
        except (TypeError, IndexError):
            return False
        return True

    def __hash__(self):
        return hash((self[0], self[1]))

