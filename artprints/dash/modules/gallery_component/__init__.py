"""
Gallery Component Module.

Infinite-scroll artwork gallery: pages of artworks are fetched as the last
card scrolls into view (or "Load more" is clicked) and appended to a
responsive grid of cards.

Module Structure:
    callbacks/__init__.py - Callback registration
    callbacks/core.py - Load, advance, render and cart callbacks
    callbacks/clientside.py - Browser-side IntersectionObserver
    frontend.py - Layout of one gallery mount
    feed.py - Artwork Feed Renderer (cards, skeletons, footer)
    pagination.py - Pagination Controller
    sentinel.py - Visibility Sentinel
    utils.py - Image URLs, blurhash placeholders, prices
"""
