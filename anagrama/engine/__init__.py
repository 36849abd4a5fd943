"""Engine modules: typography, tokenization, matching and choreography."""
