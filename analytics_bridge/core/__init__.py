"""Event translation: context data, ecommerce, video and dispatch."""
