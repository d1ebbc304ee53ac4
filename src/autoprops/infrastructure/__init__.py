"""Infrastructure layer — note files, host metadata, and the vault adapter.

This layer may depend on the domain layer and third-party libs
(ruamel.yaml, pluggy). It must never import from services, commands,
or output.
"""
