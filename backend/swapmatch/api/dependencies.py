"""Route Dependencies: caller identity and service accessors.

Invariants:
    - Caller identity always comes from the X-Caller header, never the body
    - Routes reach the registry only through get_registry()
"""

from typing import Annotated

from fastapi import Depends, Header

from swapmatch.core.domain_types import Identity
from swapmatch.core.swap_registry import SwapRegistry
from swapmatch.services.swap_services import SwapServices, get_services


def get_caller(
    x_caller: Annotated[str, Header(min_length=1, max_length=256)],
) -> Identity:
    return Identity(x_caller.strip())


def get_registry(
    services: SwapServices = Depends(get_services),
) -> SwapRegistry:
    return services.registry


Caller = Annotated[Identity, Depends(get_caller)]
Registry = Annotated[SwapRegistry, Depends(get_registry)]
Services = Annotated[SwapServices, Depends(get_services)]
