"""Test that all modules can be imported without errors."""


def test_main_package_import():
    import ormrel

    assert ormrel.__name__ == "ormrel"
    assert ormrel.__version__


def test_cli_imports():
    from ormrel.cli import generate_cmd, main

    assert callable(main.cli)
    assert callable(generate_cmd.generate)


def test_generator_imports():
    from ormrel.generator import driver, hierarchy, naming, relations

    assert callable(driver.generate)
    assert callable(hierarchy.entity_type_constraints)
    assert callable(naming.to_snake_case)
    assert callable(relations.relations_for)


def test_config_imports():
    from ormrel.config import AppConfig, load_config

    assert callable(load_config)
    assert AppConfig().generator is not None
