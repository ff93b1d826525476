"""Provisioning services: config, templating, external tools and the state machine."""
