import pytest

from scholaragent.core.config_loader import ConfigLoader
from scholaragent.errors import ConfigurationError


def test_bundled_rosters():
	loader = ConfigLoader()

	publishers = loader.get_roster('publishers')
	deep = loader.get_roster('deep')

	assert [a.name for a in publishers] == ['IEEE Xplore', 'Springer Nature', 'Elsevier', 'General']
	assert [a.name for a in publishers if a.preprint_aware] == ['General']
	assert len(deep) == 4
	assert all(a.role for a in deep)
	assert set(loader.roster_names()) >= {'publishers', 'deep'}


def test_custom_roster(tmp_path):
	(tmp_path / 'agents.yaml').write_text(
		'mini:\n  - name: Solo\n    focus_constraint: "  Search anything.  "\n    preprint_aware: true\n'
	)

	roster = ConfigLoader(tmp_path).get_roster('mini')

	assert roster[0].name == 'Solo'
	assert roster[0].focus_constraint == 'Search anything.'
	assert roster[0].allows_preprints(True)


def test_unknown_roster(tmp_path):
	(tmp_path / 'agents.yaml').write_text('mini:\n  - name: Solo\n    focus_constraint: x\n')

	with pytest.raises(ConfigurationError):
		ConfigLoader(tmp_path).get_roster('missing')


def test_bad_entry(tmp_path):
	(tmp_path / 'agents.yaml').write_text('mini:\n  - name: Solo\n')

	with pytest.raises(ConfigurationError):
		ConfigLoader(tmp_path).get_roster('mini')


def test_missing_file(tmp_path):
	with pytest.raises(ConfigurationError):
		ConfigLoader(tmp_path)
