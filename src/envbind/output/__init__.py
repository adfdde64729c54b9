"""Output layer — turns ServiceResult into text or JSON."""
