"""Release bounded context.

Contracts and error payloads shared by the publish flow (services.release)
and its presentation (cli). Nothing here talks to the outside world.
"""

from __future__ import annotations
