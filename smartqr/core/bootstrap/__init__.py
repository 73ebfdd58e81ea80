from .application import ApplicationBootstrap, ServiceContainer, build_container

__all__ = [
    "ApplicationBootstrap",
    "ServiceContainer",
    "build_container",
]
