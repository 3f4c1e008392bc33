"""
Property-based tests for CSV export.
"""

import csv
import io
from hypothesis import given, strategies as st, settings
from models import Sample
from services import ExportManager
from utils.text_cleaning import strip_thinking


texts = st.text(
    alphabet=st.one_of(
        st.characters(blacklist_categories=("Cs", "Cc")),
        st.sampled_from(["\n", "\"", ","])
    ),
    max_size=30
)

samples_strategy = st.lists(
    st.tuples(st.booleans(), texts, texts, texts),
    max_size=20
).map(lambda rows: [
    Sample(index=i, correct=c, prompt=p, prediction=pred, label=lab, position=i)
    for i, (c, p, pred, lab) in enumerate(rows)
])


# Property: one line per incorrect sample, and each line parses back to its fields
@given(samples_strategy)
@settings(max_examples=100, deadline=None)
def test_csv_rows_match_wrong_samples(samples):
    manager = ExportManager()
    csv_text = manager.build_wrong_samples_csv(samples)
    lines = csv_text.split("\n")
    wrong = [s for s in samples if not s.correct]
    
    assert lines[0] == "index,audio,prompt,prediction,label"
    assert len(lines) - 1 == len(wrong)
    
    for line, sample in zip(lines[1:], wrong):
        fields = next(csv.reader(io.StringIO(line)))
        assert fields[0] == str(sample.index)
        assert fields[3] == strip_thinking(sample.prediction).replace("\r\n", "\\n").replace("\n", "\\n")
