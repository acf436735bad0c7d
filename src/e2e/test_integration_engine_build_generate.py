import io
from pathlib import Path

import pytest

from headlines.engine import Engine
from headlines.models import GeneratedPhrase

def _seed(tmp: Path) -> Path:
    root = tmp / "Archive"; root.mkdir()
    (root / "headlines.txt").write_text(
        "markets rally as rates hold steady\n"
        "markets slump as rates climb again\n"
        "local team wins the cup again\n",
        encoding="utf-8",
    )
    return root

@pytest.mark.e2e
def test_build_from_file_and_generate(tmp_path: Path):
    root = _seed(tmp_path)
    eng = Engine()
    try:
        stats = eng.build(str(root / "headlines.txt"), prefix_length=2, seed=1)
        assert stats.starting_prefixes == 3   # markets rally, markets slump, local team
        assert stats.lines == 4               # three phrases + trailing empty line

        rows = eng.generate(8, count=5)
        assert len(rows) == 5
        for r in rows:
            assert isinstance(r, GeneratedPhrase)
            assert 2 <= r.length <= 8
            assert r.length == len(r.text.split(" "))
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_build_from_folder_reads_corpus_files_only(tmp_path: Path):
    root = tmp_path / "Mixed"; root.mkdir()
    (root / "a.txt").write_text("alpha beta gamma", encoding="utf-8")          # no trailing newline
    (root / "b.md").write_text("delta epsilon zeta\n", encoding="utf-8")
    (root / "skip.py").write_text("should not appear\n", encoding="utf-8")
    (root / ".git").mkdir()
    (root / ".git" / "c.txt").write_text("hidden words here\n", encoding="utf-8")

    eng = Engine()
    try:
        stats = eng.build(str(root), prefix_length=2)
        tokens = eng.chain.tokens
        assert stats.starting_prefixes == 2
        assert "gammadelta" not in tokens        # files never fuse
        assert "gamma" in tokens and "delta" in tokens
        assert "should" not in tokens and "hidden" not in tokens
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_build_from_stream_and_seed_reproducibility():
    data = b"a b c d\na b d c\nb c d a\n"
    e1, e2 = Engine(), Engine()
    e1.build(stream=io.BytesIO(data), prefix_length=1, seed=99)
    e2.build(stream=io.BytesIO(data), prefix_length=1, seed=99)
    assert [r.text for r in e1.generate(6, count=10)] == [r.text for r in e2.generate(6, count=10)]

def test_engine_guards():
    eng = Engine()
    with pytest.raises(RuntimeError):
        eng.generate(10)
    with pytest.raises(RuntimeError):
        eng.stats()
    with pytest.raises(ValueError):
        eng.build()
    with pytest.raises(ValueError):
        eng.build("x.txt", stream=io.BytesIO(b""))
    with pytest.raises(FileNotFoundError):
        eng.build("/definitely/not/here.txt")
    assert not eng.ready

    eng.build(stream=io.BytesIO(b"one two three"), prefix_length=2)
    assert eng.ready
    with pytest.raises(ValueError):
        eng.generate(10, count=0)
    with pytest.raises(ValueError):
        eng.generate(10, count=10_000)
