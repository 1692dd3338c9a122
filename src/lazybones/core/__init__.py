"""Lazybones core: configuration, package resolution, caching and installation."""
