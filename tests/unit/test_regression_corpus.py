from __future__ import annotations

import pytest
from interpolate.parser import parse_template
from tests.regression.corpus import CASES, CorpusCase


@pytest.mark.parametrize("case", CASES, ids=[case.name for case in CASES])
def test_corpus_case(case: CorpusCase) -> None:
    result = parse_template(case.template)

    assert result.normalized == case.normalized
    assert result.identifiers == case.identifiers
    assert tuple(result.anomalies) == case.anomalies
