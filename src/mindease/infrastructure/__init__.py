"""
MindEase Infrastructure Layer

Cross-cutting integrations. Currently Prometheus metrics only;
the conversation core holds no external connections.
"""
