"""
Gallery Component - Browser-side IntersectionObserver

One observer per gallery mount, kept in ``window._artprintsObservers``.
It is replaced whenever the sentinel store names a new target/generation and
disconnected when the URL path changes. Intersections are reported to the
mount's intersection store through ``dash_clientside.set_props``.
"""

from dash import MATCH, Input, Output


def register_clientside_callbacks(app):
    """Register the observer management callbacks."""

    app.clientside_callback(
        """
        function(sentinel) {
            if (!sentinel || !sentinel.mount_id) {
                return window.dash_clientside.no_update;
            }

            window._artprintsObservers = window._artprintsObservers || {};
            window._artprintsSentinelSeq = window._artprintsSentinelSeq || {};

            const mountId = sentinel.mount_id;
            const current = window._artprintsObservers[mountId];

            // Same observer still live
            if (current &&
                current._target === sentinel.target &&
                current._generation === sentinel.generation) {
                return window.dash_clientside.no_update;
            }

            if (current) {
                current.disconnect();
                delete window._artprintsObservers[mountId];
            }

            if (!sentinel.target) {
                return window.dash_clientside.no_update;
            }

            const storeId = {type: 'gallery-intersection-store', index: mountId};
            const observer = new IntersectionObserver(function(entries) {
                entries.forEach(function(entry) {
                    if (!entry.isIntersecting) {
                        return;
                    }
                    const seq = (window._artprintsSentinelSeq[mountId] || 0) + 1;
                    window._artprintsSentinelSeq[mountId] = seq;
                    window.dash_clientside.set_props(storeId, {
                        data: {
                            generation: sentinel.generation,
                            seq: seq,
                            target: sentinel.target
                        }
                    });
                });
            });
            observer._target = sentinel.target;
            observer._generation = sentinel.generation;
            window._artprintsObservers[mountId] = observer;

            // The card may not be in the DOM yet when the store updates
            let attempts = 0;
            const observeTarget = function() {
                if (window._artprintsObservers[mountId] !== observer) {
                    return;
                }
                const node = document.getElementById(sentinel.target);
                if (node) {
                    observer.observe(node);
                } else if (attempts++ < 20) {
                    window.requestAnimationFrame(function() {
                        setTimeout(observeTarget, 50);
                    });
                } else {
                    console.warn('[Gallery] Sentinel target not found:', sentinel.target);
                }
            };
            observeTarget();

            return window.dash_clientside.no_update;
        }
        """,
        Output({"type": "gallery-observer", "index": MATCH}, "children"),
        Input({"type": "gallery-sentinel-store", "index": MATCH}, "data"),
    )

    app.clientside_callback(
        """
        function(pathname) {
            const observers = window._artprintsObservers || {};
            Object.keys(observers).forEach(function(mountId) {
                observers[mountId].disconnect();
            });
            window._artprintsObservers = {};
            window._artprintsSentinelSeq = {};
            return window.dash_clientside.no_update;
        }
        """,
        Output("gallery-observer-release", "children"),
        Input("url", "pathname"),
    )
