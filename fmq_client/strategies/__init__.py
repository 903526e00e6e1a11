"""
Transport strategies for different HTTP libraries.

Modules are imported by TransportFactory on demand so that a missing
library only affects the transport that needs it.
"""
