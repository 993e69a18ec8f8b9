"""Ports layer - interfaces between the injector domain and the outside."""
