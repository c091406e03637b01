# Path: tests/unit/test_walker.py
"""
Unit Tests for DocumentWalker

Tests the streaming traversal including:
- Root and record key skipping
- Positional EIN correlation (field order matters)
- Record isolation
- Element decoding (nulls, extra fields)
- Structural errors with context
"""

import ijson
import pytest

from conftest import ein, file_ref, make_record
from ppo_index.errors import ErrorCategory, IndexStructureError
from ppo_index.loaders.heuristic_tables import HeuristicTables
from ppo_index.process.classifiers.base_classifier import BaseClassifier
from ppo_index.process.models import ClassificationOutcome, OutcomeStatus
from ppo_index.process.modes import ClassificationMode
from ppo_index.process.session import ExtractionSession
from ppo_index.process.walker import DocumentWalker, is_truncation


class RecordingClassifier(BaseClassifier):
    """Remembers every (context, file reference) pair it is given."""

    def __init__(self, mode=ClassificationMode.ANALYSIS):
        self._mode = mode
        super().__init__(HeuristicTables(), ExtractionSession())
        self.seen = []

    @property
    def mode(self):
        return self._mode

    def classify(self, context, file_reference):
        self.seen.append((context, file_reference))
        return ClassificationOutcome(OutcomeStatus.COLLECTED)


@pytest.fixture
def classifier():
    return RecordingClassifier()


@pytest.fixture
def walker(classifier):
    return DocumentWalker(classifier)


class TestTraversal:
    """Happy-path traversal."""

    def test_file_references_in_document_order(self, walker, classifier, json_stream):
        document = {'reporting_structure': [
            make_record(files=[file_ref('A', 'https://h/a'), file_ref('B', 'https://h/b')]),
            make_record(files=[file_ref('C', 'https://h/c')]),
        ]}

        stats = walker.walk(json_stream(document))

        assert [ref.description for _, ref in classifier.seen] == ['A', 'B', 'C']
        assert [ctx.record_index for ctx, _ in classifier.seen] == [0, 0, 1]
        assert stats.records == 2
        assert stats.file_references == 3

    def test_other_root_keys_are_skipped(self, walker, classifier, json_stream):
        document = {
            'reporting_entity_name': 'Example',
            'nested': {'a': [1, {'b': [None, True]}], 'reporting_structure': 'decoy'},
            'reporting_structure': [make_record(files=[file_ref('A', 'L')])],
            'version': '1.0.0',
        }

        stats = walker.walk(json_stream(document))

        assert len(classifier.seen) == 1
        assert stats.skipped_root_keys == 3

    def test_missing_reporting_structure(self, walker, classifier, json_stream):
        stats = walker.walk(json_stream({'reporting_entity_name': 'Example'}))

        assert classifier.seen == []
        assert stats.records == 0

    def test_empty_document_object(self, walker, json_stream):
        stats = walker.walk(json_stream('{}'))
        assert stats.records == 0

    def test_unknown_record_keys_are_skipped(self, walker, classifier, json_stream):
        record = make_record(
            files=[file_ref('A', 'L')],
            allowed_amount_file={'description': 'x', 'location': 'y'},
            extra=[[1, 2], {'in_network_files': 'decoy'}],
        )

        walker.walk(json_stream({'reporting_structure': [record]}))

        assert [ref.description for _, ref in classifier.seen] == ['A']

    def test_unknown_element_fields_are_skipped(self, walker, classifier, json_stream):
        element = {'meta': {'location': 'decoy'}, 'description': 'A', 'location': 'L', 'n': 5}

        walker.walk(json_stream({'reporting_structure': [{'in_network_files': [element]}]}))

        _, ref = classifier.seen[0]
        assert (ref.description, ref.location) == ('A', 'L')

    def test_null_element_and_fields_decode_empty(self, walker, classifier, json_stream):
        document = {'reporting_structure': [{'in_network_files': [
            None,
            {'description': None, 'location': 'L'},
            {},
        ]}]}

        walker.walk(json_stream(document))

        refs = [(ref.description, ref.location) for _, ref in classifier.seen]
        assert refs == [('', ''), ('', 'L'), ('', '')]

    def test_empty_arrays(self, walker, classifier, json_stream):
        document = {'reporting_structure': [
            {'reporting_plans': [], 'in_network_files': []},
            {},
        ]}

        stats = walker.walk(json_stream(document))

        assert classifier.seen == []
        assert stats.records == 2

    def test_results_arrive_before_end_of_stream(self, walker, classifier, json_stream):
        """File references are classified as soon as they are complete."""
        truncated = (
            '{"reporting_structure": [{"in_network_files": ['
            '{"description": "A", "location": "L"},'
        )

        with pytest.raises(IndexStructureError):
            walker.walk(json_stream(truncated))

        assert [ref.description for _, ref in classifier.seen] == ['A']


class TestCorrelation:
    """EINs reaching the classifier."""

    def test_plans_before_files(self, walker, classifier, json_stream):
        record = make_record(
            plans=[ein('11-1'), {'plan_id_type': 'HIOS', 'plan_id': '999'}, ein('22-2')],
            files=[file_ref('A', 'L')],
        )

        stats = walker.walk(json_stream({'reporting_structure': [record]}))

        context, _ = classifier.seen[0]
        assert context.eins == frozenset({'11-1', '22-2'})
        assert stats.plan_identifiers == 3
        assert stats.late_identifier_records == 0

    def test_files_before_plans_get_no_eins(self, walker, classifier, json_stream):
        record = make_record(
            plans=[ein('11-1')],
            files=[file_ref('A', 'L')],
            plans_first=False,
        )

        stats = walker.walk(json_stream({'reporting_structure': [record]}))

        context, _ = classifier.seen[0]
        assert context.eins == frozenset()
        assert stats.late_identifier_records == 1

    def test_records_are_isolated(self, walker, classifier, json_stream):
        document = {'reporting_structure': [
            make_record(plans=[ein('11-1')], files=[file_ref('A', 'L')]),
            make_record(files=[file_ref('B', 'L')]),
            make_record(plans=[ein('33-3')], files=[file_ref('C', 'L')]),
        ]}

        walker.walk(json_stream(document))

        eins = [ctx.eins for ctx, _ in classifier.seen]
        assert eins == [frozenset({'11-1'}), frozenset(), frozenset({'33-3'})]

    def test_repeated_plans_key_accumulates(self, walker, classifier, json_stream):
        text = (
            '{"reporting_structure": [{'
            '"reporting_plans": [{"plan_id_type": "EIN", "plan_id": "a"}],'
            '"reporting_plans": [{"plan_id_type": "EIN", "plan_id": "b"}],'
            '"in_network_files": [{"description": "A", "location": "L"}]'
            '}]}'
        )

        walker.walk(json_stream(text))

        context, _ = classifier.seen[0]
        assert context.eins == frozenset({'a', 'b'})

    def test_plans_ignored_when_mode_does_not_use_them(self, json_stream):
        """Heuristic modes never decode reporting_plans, even malformed ones."""
        classifier = RecordingClassifier(ClassificationMode.HEURISTICS)
        walker = DocumentWalker(classifier)
        record = make_record(plans=[42, 'not an object'], files=[file_ref('A', 'L')])

        stats = walker.walk(json_stream({'reporting_structure': [record]}))

        context, _ = classifier.seen[0]
        assert context.eins == frozenset()
        assert stats.plan_identifiers == 0


class TestStructuralErrors:
    """Fatal errors carry context."""

    def test_root_must_be_object(self, walker, json_stream):
        with pytest.raises(IndexStructureError) as exc_info:
            walker.walk(json_stream('[]'))
        assert exc_info.value.category == ErrorCategory.STRUCTURE_INVALID

    def test_reporting_structure_must_be_array(self, walker, json_stream):
        with pytest.raises(IndexStructureError) as exc_info:
            walker.walk(json_stream({'reporting_structure': {'a': 1}}))
        assert exc_info.value.field == 'reporting_structure'

    def test_record_must_be_object(self, walker, json_stream):
        with pytest.raises(IndexStructureError) as exc_info:
            walker.walk(json_stream({'reporting_structure': [{}, 'oops']}))
        assert exc_info.value.record_index == 1

    def test_file_references_must_be_array(self, walker, json_stream):
        document = {'reporting_structure': [{'in_network_files': 'oops'}]}

        with pytest.raises(IndexStructureError) as exc_info:
            walker.walk(json_stream(document))
        assert exc_info.value.field == 'in_network_files'

    def test_element_must_be_object(self, walker, json_stream):
        document = {'reporting_structure': [{'in_network_files': [7]}]}

        with pytest.raises(IndexStructureError) as exc_info:
            walker.walk(json_stream(document))
        assert exc_info.value.category == ErrorCategory.ELEMENT_INVALID

    def test_element_field_must_be_string(self, walker, classifier, json_stream):
        document = {'reporting_structure': [
            {'in_network_files': [file_ref('A', 'L')]},
            {'in_network_files': [{'description': 'B', 'location': ['x']}]},
        ]}

        with pytest.raises(IndexStructureError) as exc_info:
            walker.walk(json_stream(document))

        error = exc_info.value
        assert error.category == ErrorCategory.ELEMENT_INVALID
        assert error.field == 'in_network_files'
        assert error.record_index == 1
        assert len(classifier.seen) == 1

    def test_plan_id_must_be_string(self, walker, json_stream):
        record = make_record(plans=[{'plan_id_type': 'EIN', 'plan_id': 123}])

        with pytest.raises(IndexStructureError) as exc_info:
            walker.walk(json_stream({'reporting_structure': [record]}))
        assert exc_info.value.field == 'reporting_plans'

    def test_truncated_document(self, walker, json_stream):
        with pytest.raises(IndexStructureError) as exc_info:
            walker.walk(json_stream('{"reporting_structure": [{"in_network_files": ['))
        assert exc_info.value.category in (
            ErrorCategory.UNEXPECTED_EOF, ErrorCategory.JSON_MALFORMED
        )

    def test_empty_input(self, walker, json_stream):
        with pytest.raises(IndexStructureError):
            walker.walk(json_stream(''))

    def test_malformed_json(self, walker, json_stream):
        with pytest.raises(IndexStructureError):
            walker.walk(json_stream('{"reporting_structure": [}'))

    def test_invalid_utf8_is_malformed_not_truncated(self, walker, json_stream):
        body = (
            b'{"reporting_structure": [{"in_network_files": '
            b'[{"description": "\xff\xfe bad", "location": "https://h/x.json"}]}]}'
        )

        with pytest.raises(IndexStructureError) as exc_info:
            walker.walk(json_stream(body))
        assert exc_info.value.category == ErrorCategory.JSON_MALFORMED

    @pytest.mark.parametrize('message, truncated', [
        ('Incomplete JSON content', True),
        ("b'parse error: premature EOF'", True),
        ("b'lexical error: invalid bytes in UTF8 string.'", False),
        ("b'parse error: unallowed token at this point in JSON text'", False),
    ])
    def test_decoder_error_classification(self, message, truncated):
        assert is_truncation(ijson.IncompleteJSONError(message)) is truncated

    def test_error_message_includes_context(self, walker, json_stream):
        with pytest.raises(IndexStructureError) as exc_info:
            walker.walk(json_stream({'reporting_structure': [{'in_network_files': [7]}]}))

        message = str(exc_info.value)
        assert 'ELEMENT_INVALID' in message
        assert 'Field: in_network_files' in message
        assert 'Record: 0' in message
