class CertMapError(Exception):
    """Base class for pipeline errors."""


class SourceFetchError(CertMapError):
    """A local file or URL could not be read."""


class DatasetLoadError(CertMapError):
    """The roster spreadsheet is unreachable or unparsable. Fatal."""
