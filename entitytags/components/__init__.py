"""Components layer - domain logic building blocks.

Components are leaf modules that:
- Do NOT import services, workflows, or interfaces
- ARE imported and used BY workflows and services
- May import from: helpers, persistence, other components

Architecture:
- helpers/ = stdlib-only utilities and DTOs (pure, stateless)
- persistence/ = store operation classes (ArangoDB, Elasticsearch)
- components/ = domain logic building blocks (this layer)
- workflows/ = orchestration of components + persistence
- services/ = DI, wiring, long-lived resources
- interfaces/ = HTTP/CLI presentation
"""
