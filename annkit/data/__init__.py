"""Dataset abstraction and index-based views."""

from .dataset import ArrayDataSet, DataSet
from .view import DataSetView, merge, split, split_ratio

__all__ = ["ArrayDataSet", "DataSet", "DataSetView", "merge", "split", "split_ratio"]
