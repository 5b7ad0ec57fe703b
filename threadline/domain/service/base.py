"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services here are pure: they read immutable snapshots of events
    and return derived values, never touching I/O or shared state. They are
    safe to call again on every new delivery from a subscription.
    """

    pass
