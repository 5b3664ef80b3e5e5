"""Application framework pieces shared by the bridge modules."""
