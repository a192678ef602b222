"""Interface adapters: REST API and the notification feed presenter."""
