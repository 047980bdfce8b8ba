"""Runtime class declaration and introspection engine."""
