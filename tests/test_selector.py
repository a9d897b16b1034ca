"""
Tests for companion file selection.
"""

from bundlepack.prompt import ScriptedPrompter
from bundlepack.selector import select_project_files

FILES = [
    "foo-1.0.jar",
    "foo-1.0-sources.jar",
    "foo-1.0-javadoc.jar",
    "foo-1.0.jar.asc",
    "bar-1.0.jar",
    "_remote.repositories",
]


def names(paths):
    return [path.name for path in paths]


def test_batch_mode_selects_all_matching_files(install_artifact):
    pom = install_artifact(files=FILES)
    prompter = ScriptedPrompter()

    selected = select_project_files(pom.parent, "foo-1.0", pom, prompter, batch_mode=True)

    assert names(selected) == [
        "foo-1.0-javadoc.jar",
        "foo-1.0-sources.jar",
        "foo-1.0.jar",
        "foo-1.0.jar.asc",
    ]
    assert prompter.asked == []


def test_descriptor_is_not_selected(install_artifact):
    pom = install_artifact(files=["foo-1.0.jar"])
    selected = select_project_files(pom.parent, "foo-1.0", pom, ScriptedPrompter(), batch_mode=True)
    assert pom.name not in names(selected)


def test_descriptor_selected_when_not_excluded(install_artifact):
    pom = install_artifact()
    selected = select_project_files(pom.parent, "foo-1.0", None, ScriptedPrompter(), batch_mode=True)
    assert names(selected) == ["foo-1.0.pom"]


def test_interactive_mode_confirms_each_file(install_artifact):
    pom = install_artifact(files=["foo-1.0.jar", "foo-1.0-tests.jar"])
    prompter = ScriptedPrompter({"include:foo-1.0-tests.jar": False})

    selected = select_project_files(pom.parent, "foo-1.0", pom, prompter, batch_mode=False)

    assert names(selected) == ["foo-1.0.jar"]
    assert prompter.asked == ["include:foo-1.0-tests.jar", "include:foo-1.0.jar"]


def test_directories_are_ignored(install_artifact):
    pom = install_artifact(files=["foo-1.0.jar"])
    (pom.parent / "foo-1.0-extras").mkdir()
    selected = select_project_files(pom.parent, "foo-1.0", pom, ScriptedPrompter(), batch_mode=True)
    assert names(selected) == ["foo-1.0.jar"]


def test_custom_final_name(install_artifact):
    pom = install_artifact(files=["foo-final.jar", "foo-1.0.jar"])
    selected = select_project_files(pom.parent, "foo-final", pom, ScriptedPrompter(), batch_mode=True)
    assert names(selected) == ["foo-final.jar"]


def test_previous_bundles_are_not_selected(install_artifact):
    pom = install_artifact(files=["foo-1.0.jar", "foo-1.0-bundle.jar", "foo-1.0-bundle.zip"])
    selected = select_project_files(pom.parent, "foo-1.0", pom, ScriptedPrompter(), batch_mode=True)
    assert names(selected) == ["foo-1.0.jar"]
