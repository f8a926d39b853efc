from fakes import make_reference

from scholaragent.research.deduplication import TitleDeduplicator, title_key


def test_title_key():
	assert title_key('Attention Is All You Need!') == 'attentionisallyouneed'
	assert title_key('BERT: Pre-training of Deep Bidirectional Transformers') == 'bertpretrainingofdeepbidirectionaltransformers'


def test_first_occurrence_wins():
	refs = [
		make_reference('Attention Is All You Need', source='IEEE Xplore'),
		make_reference('attention is all you need.', source='General'),
		make_reference('Deep Residual Learning', source='General'),
	]

	unique = TitleDeduplicator().deduplicate(refs)

	assert [(r.title, r.source) for r in unique] == [
		('Attention Is All You Need', 'IEEE Xplore'),
		('Deep Residual Learning', 'General'),
	]


def test_long_titles_sharing_a_prefix_stay_distinct():
	prefix = 'A Comprehensive Survey of Graph Neural Networks for Molecular Property Prediction'
	refs = [make_reference(f'{prefix}: Methods'), make_reference(f'{prefix}: Benchmarks')]

	assert len(TitleDeduplicator().deduplicate(refs)) == 2


def test_truncated_keys_merge_shared_prefixes():
	refs = [make_reference('Graph Networks Part One'), make_reference('Graph Networks Part Two')]
	assert len(TitleDeduplicator(max_key_length=10).deduplicate(refs)) == 1


def test_idempotent():
	refs = [make_reference('A'), make_reference('a'), make_reference('B')]
	deduplicator = TitleDeduplicator()

	once = deduplicator.deduplicate(refs)

	assert deduplicator.deduplicate(once) == once


def test_non_latin_titles_are_deduplicated():
	refs = [
		make_reference('深層学習の応用', source='A'),
		make_reference('深層学習の応用。', source='B'),
		make_reference('Глубокое обучение'),
	]

	unique = TitleDeduplicator().deduplicate(refs)

	assert [r.source for r in unique] == ['A', 'IEEE Xplore']
	assert title_key('Глубокое Обучение') == 'глубокоеобучение'


def test_titles_without_alphanumerics_are_kept():
	refs = [make_reference('???'), make_reference('???')]
	assert len(TitleDeduplicator().deduplicate(refs)) == 2


def test_empty():
	assert TitleDeduplicator().deduplicate([]) == []
