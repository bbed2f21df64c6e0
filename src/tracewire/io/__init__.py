"""IO layer: how span contexts cross process boundaries."""
