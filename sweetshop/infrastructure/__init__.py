"""Infraestructura: pool PostgreSQL + repositorios (Postgres / InMemory)."""
