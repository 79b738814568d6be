class WsdlSortError(Exception):
    """Base class for failures that abort a sort run."""


class SchemaNotFoundError(WsdlSortError):
    """The schema section is missing, or more than one schema matched."""


class SortKeyCollisionError(WsdlSortError):
    """Two distinct nodes share a sort key; sorting would drop one of them."""


class ImportCountError(WsdlSortError):
    """The fragment document did not receive every sorted node."""
