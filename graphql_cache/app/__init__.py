"""
GraphQL cache application package.

- events: per-instance publish/subscribe channel
- cache: store of committed values and its lifecycle events
- loading: in-flight load registry, cancellation and load controllers
- subscriptions: helpers that tie store events to UI bindings
- transport: GraphQL-over-HTTP fetching shaped for caching
"""
