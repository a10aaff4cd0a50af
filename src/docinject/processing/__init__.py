from docinject.processing.content_classifier import ContentClassifier

__all__ = ['ContentClassifier']
