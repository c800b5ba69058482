"""
Tests for the path-level page cache.
"""

from invoice_dashboard.services.cache import PageCache


def test_revalidate_drops_cached_path():
    cache = PageCache()
    cache.set("/dashboard/invoices", ["rendered"])
    cache.set("/dashboard", ["overview"])

    cache.revalidate_path("/dashboard/invoices")

    assert cache.get("/dashboard/invoices") is None
    assert cache.get("/dashboard") == ["overview"]


def test_revalidate_uncached_path_is_noop():
    cache = PageCache()

    cache.revalidate_path("/dashboard/invoices")

    assert cache.get("/dashboard/invoices") is None


def test_set_replaces_previous_rendering():
    cache = PageCache()
    cache.set("/dashboard/invoices", ["old"])
    cache.set("/dashboard/invoices", ["new"])

    assert cache.get("/dashboard/invoices") == ["new"]
