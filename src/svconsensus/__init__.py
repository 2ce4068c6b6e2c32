"""
consensus structural variant calls from the chimeric alignments of assembled contigs
"""
__version__ = '1.0.0'
