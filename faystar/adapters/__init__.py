"""Outbound integrations: request normalizers and the generic provider client."""
