#!/usr/bin/env python3
"""
Demonstration of servicewire.

This demo shows:
1. Registering services with requirements and parameters
2. Configuring parameters before loading
3. Singleton lifetime
4. Event sources and listeners
5. Dependency graph ordering and GraphViz output
6. Error reporting
"""

import logging

from servicewire import Container, GraphVizFormatter, Parameter


# Example domain: a small order processing application


class Database:
    """Database connection configured with a connection string."""

    def query(self, sql: str) -> str:
        return f"Database[{self._connectionString}]: {sql}"


class OrderRepository:
    """Stores orders and raises OrderSaved."""

    def save(self, order_id: int) -> str:
        result = self._database.query(f"INSERT INTO orders VALUES ({order_id})")
        self._notifyOrderSaved(order_id)
        return result


class AuditLog:
    """Records saved orders."""

    def __init__(self):
        self.entries: list[str] = []

    def OnOrderSaved(self, order_id: int) -> None:  # noqa: N802
        self.entries.append(f"order {order_id} saved")


class Mailer:
    """Sends a confirmation for every saved order."""

    def OnOrderSaved(self, order_id: int) -> None:  # noqa: N802
        print(f"Mailer: sending confirmation for order {order_id} (retries: {self._retries})")


class OrderService:
    """Entry point of the application."""

    def place(self, order_id: int) -> str:
        return self._repository.save(order_id)


def build_container() -> Container:
    container = Container()

    container.register(
        "_database",
        Database,
        parameters=[Parameter.of_type("_connectionString", str)],
        singleton=True,
    )
    container.register(
        "_repository", OrderRepository, requires=["_database"], event_source=["OrderSaved"]
    )
    container.register("_audit", AuditLog, singleton=True, event_listener=["OrderSaved"])
    container.make("_mailer").parameters(Parameter.of_type("_retries", int)).listens(
        "OrderSaved"
    ).singleton().using(Mailer)
    container.register("_orders", OrderService, requires=["_repository"])

    return container


def main():
    """Main demo function."""
    logging.basicConfig(level=logging.INFO)
    print("=== servicewire Demo ===\n")

    container = build_container()

    print("1. Configuration and loading:")
    print("-" * 30)
    container.configure("_database", "postgresql://localhost:5432/shop")
    container.configure("_mailer", 3)

    audit = container.load("_audit")
    container.load("_mailer")
    orders = container.load("_orders")
    print(f"Result: {orders.place(42)}")

    print("\n2. Events:")
    print("-" * 30)
    container.notify_event("OrderSaved", [43])
    print(f"Audit entries: {audit.entries}")

    print("\n3. Singletons:")
    print("-" * 30)
    print(f"Same database: {container.load('_database') is orders._repository._database}")

    print("\n4. Dependency graph:")
    print("-" * 30)
    print(container.grapher().simple_graph())
    print(GraphVizFormatter(container.registry).render())

    print("5. Error reporting:")
    print("-" * 30)
    try:
        container.configure("_mailer", "three")
    except ValueError as e:
        print(f"Caught expected invalid parameter: {e}")

    try:
        container.load("_inventory")
    except LookupError as e:
        print(f"Caught expected missing service: {e}")

    print("\nDemo completed successfully!")


if __name__ == "__main__":
    main()
