"""Identity of the authenticated customer making a request."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Caller:
    """Explicit caller context handed to every ownership-scoped operation.

    Authentication happens upstream; by the time a ``Caller`` exists the
    customer id is trusted.
    """

    customer_id: str

    def owns(self, customer_id) -> bool:
        return str(customer_id) == str(self.customer_id)
