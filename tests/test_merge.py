from fakes import make_reference, source_record

from scholaragent.research.merge import MIN_ABSTRACT_LENGTH, merge_record, merge_records

LONG_ABSTRACT = 'We propose the Transformer, a network architecture based solely on attention mechanisms.'


def test_more_trusted_source_wins_text_fields():
	ref = make_reference('attention is all you need')
	records = [
		source_record('crossref', title='Attention is all you need', venue='NeurIPS', year=2017),
		source_record('semantic_scholar', title='Attention Is All You Need', venue='Neural Information Processing Systems'),
		source_record('openalex', title='Attention Is All You Need.', venue='Advances in Neural Information Processing Systems'),
	]

	merge_records(ref, records)

	assert ref.title == 'Attention Is All You Need.'
	assert ref.venue == 'Advances in Neural Information Processing Systems'
	assert ref.year == '2017'
	assert ref.field_sources['title'] == 'openalex'
	assert ref.field_sources['year'] == 'crossref'


def test_empty_values_never_overwrite():
	ref = make_reference(venue='NeurIPS')
	merge_records(ref, [source_record('openalex', title='', venue='   ', authors=[])])

	assert ref.title == 'Attention Is All You Need'
	assert ref.venue == 'NeurIPS'
	assert ref.authors == ['Unknown']


def test_citation_count_takes_the_maximum():
	ref = make_reference()
	records = [
		source_record('crossref', citation_count=120),
		source_record('semantic_scholar', citation_count=80),
		source_record('openalex', citation_count=100),
	]

	merge_records(ref, records)

	assert ref.citation_count == 120
	assert ref.field_sources['citation_count'] == 'crossref'


def test_short_abstract_does_not_replace_substantial_one():
	ref = make_reference()
	merge_records(
		ref,
		[
			source_record('crossref', abstract=LONG_ABSTRACT),
			source_record('openalex', abstract='Too short.'),
		],
	)

	assert len(LONG_ABSTRACT) >= MIN_ABSTRACT_LENGTH
	assert ref.abstract == LONG_ABSTRACT


def test_merge_record_reports_updated_fields():
	ref = make_reference()
	updated = merge_record(ref, source_record('semantic_scholar', authors=['Ashish Vaswani'], citation_count=5))

	assert set(updated) == {'authors', 'citation_count'}
	assert ref.authors == ['Ashish Vaswani']


def test_none_records_are_skipped():
	ref = make_reference(venue='ICML')
	merge_records(ref, [None, source_record('crossref', venue='ICLR'), None])
	assert ref.venue == 'ICLR'


def test_blank_author_names_are_ignored():
	ref = make_reference(authors=['Ashish Vaswani'])

	updated = merge_record(ref, source_record('openalex', authors=['', '   ']))

	assert 'authors' not in updated
	assert ref.authors == ['Ashish Vaswani']
