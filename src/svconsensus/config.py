import json
from typing import Dict

from .util import cast

SECTION = 'discovery.'


def get_by_prefix(config: Dict, prefix: str) -> Dict:
    return {k.replace(prefix, ''): v for k, v in config.items() if k.startswith(prefix)}


DEFAULTS: Dict = {
    'discovery.high_mapping_quality_threshold': 60,
    'discovery.min_mapping_quality': 60,
    'discovery.min_alignment_length': 50,
}
"""default values for the discovery settings, keyed by their full config name"""


class DiscoverySettings:
    """
    holds the thresholds used in building evidence and aggregating statistics

    Attributes:
        high_mapping_quality_threshold: an evidence record counts towards the high quality mappings when its
            minimum mapping quality is exactly this value
        min_mapping_quality: alignments below this mapping quality cannot anchor a chimeric alignment
        min_alignment_length: alignments spanning less of the reference than this cannot anchor a chimeric alignment
    """

    high_mapping_quality_threshold: int
    min_mapping_quality: int
    min_alignment_length: int

    def __init__(self, **kwargs):
        inputs = {}
        defaults = get_by_prefix(DEFAULTS, SECTION)
        inputs.update(defaults)
        inputs.update(kwargs)
        for arg, val in inputs.items():
            if arg not in defaults:
                raise KeyError('unrecognized argument', arg)
            setattr(self, arg, cast(val, type(defaults[arg])))

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__name__,
            ', '.join(
                [
                    '{}={}'.format(k, repr(getattr(self, k)))
                    for k in sorted(get_by_prefix(DEFAULTS, SECTION))
                ]
            ),
        )

    @classmethod
    def from_config(cls, config: Dict) -> 'DiscoverySettings':
        """
        Args:
            config: a flat config dictionary. Only the keys in the discovery section are used

        Example:
            >>> DiscoverySettings.from_config({'discovery.min_alignment_length': 30})
        """
        return cls(**get_by_prefix(config, SECTION))


def load_config(filename: str) -> DiscoverySettings:
    """
    read the discovery settings from a JSON config file
    """
    with open(filename, 'r') as fh:
        config = json.load(fh)
    return DiscoverySettings.from_config(config)
