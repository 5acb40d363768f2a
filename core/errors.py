# core/errors.py


class RankingError(ValueError):
    """Base class for every condition raised by the ranking engine."""


class EmptyCandidateSet(RankingError):
    def __init__(self, message: str = "No candidates available for ranking."):
        super().__init__(message)


class NoOverlappingCriteria(RankingError):
    def __init__(self, message: str = "Weights do not overlap with candidate metrics."):
        super().__init__(message)


class AllWeightsZero(RankingError):
    def __init__(self, message: str = "At least one weight must be non-zero."):
        super().__init__(message)


class MalformedPairwiseMatrix(RankingError):
    def __init__(self, message: str = "Pairwise matrix must be square and match the criteria list length."):
        super().__init__(message)


class MissingAhpInputs(RankingError):
    def __init__(self, message: str = "AHP requires a pairwise matrix and criteria order."):
        super().__init__(message)


class UnknownRankingMethod(RankingError):
    def __init__(self, value: object):
        super().__init__(f"Unknown ranking method: {value!r}")
        self.value = value
