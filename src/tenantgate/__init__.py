"""TenantGate - access control and plan entitlements for multi-tenant SaaS."""

__version__ = "0.1.0"
