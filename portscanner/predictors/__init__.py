from .base import Predictor
from .webserver import ApachePredictor, HTTPServerPredictor, NginxPredictor


def default_predictors():
    return [ApachePredictor(), NginxPredictor()]


__all__ = [
    "ApachePredictor",
    "HTTPServerPredictor",
    "NginxPredictor",
    "Predictor",
    "default_predictors",
]
