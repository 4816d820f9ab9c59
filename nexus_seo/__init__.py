"""Nexus SEO: headless page crawls, deterministic scoring and audit assembly."""
