from patent_analysis.pipeline import AnalysisPipeline
from patent_analysis.utils.files import compute_sha256


def test_compute_sha256_of_bytes() -> None:
    assert compute_sha256(b"abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


def test_pipeline_outcome_carries_fingerprint() -> None:
    content = "出願日,出願人\n2020/01/01,A Corp\n".encode("utf-8")

    outcome = AnalysisPipeline().run(content, file_name="export.csv")

    assert outcome.sha256 == compute_sha256(content)
