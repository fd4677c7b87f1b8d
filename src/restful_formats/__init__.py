"""REST response negotiation and data mapping.

This package decides which wire format a REST endpoint should emit from
the client's preference and the formats registered on the server, and
converts resource trees to and from those formats, including a schema-less
mapping between nested dictionaries/lists and XML.

:var __version__: Current package version
:type __version__: str
"""

__version__ = "0.1.0"
