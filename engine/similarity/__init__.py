"""
Similarity measures between term series: Pearson correlation, shape distances, lead/lag detection, pairwise comparison reports and multi-term correlation matrices.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


from engine.similarity.pearson import pearson
from engine.similarity.distance import cosine, dtw, euclidean, normalize
from engine.similarity.lag import LagCorrelation, LeadLag, cross_correlation, lead_lag
from engine.similarity.compare import SimilarityReport, TermSummary, compare, interpret_correlation
from engine.similarity.matrix import CorrelationMatrix, correlation_matrix

__all__ = [
    "pearson",
    "cosine",
    "dtw",
    "euclidean",
    "normalize",
    "LagCorrelation",
    "LeadLag",
    "cross_correlation",
    "lead_lag",
    "SimilarityReport",
    "TermSummary",
    "compare",
    "interpret_correlation",
    "CorrelationMatrix",
    "correlation_matrix",
]
