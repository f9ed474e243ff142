"""Services — async orchestration of core logic around repository calls."""
