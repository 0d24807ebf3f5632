"""
Configuration and builder behavioral tests.

Scope
- Validate required construction arguments of the builder.
- Validate write-once settings, registration forms (use / use_all), duplicate detection.
- Validate build(): empty configurations rejected, defaults applied, builder sealed afterwards.
- Validate direct construction of EnumOptionConfig and its read-only surface.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from enum import Enum
from unittest import TestCase

from enumoption import (
    EnumOptionConfig,
    EnumOptionConfigBuilder,
    AlreadyConfiguredError,
    DuplicateRepresentationError,
    EmptyConfigurationError,
    ValueMap,
    ordinal,
)

TEMPLATE = "-t | --test"
DESCRIPTION = "Much test."


class TestEnum(Enum):
    __test__ = False  # not a test case for collectors

    abc = 1
    def_ = 2
    ghi = 3


class Other(Enum):
    abc = 1


class TestBuilderConstruction(TestCase):
    """Construction-time validation of EnumOptionConfigBuilder."""

    def testTemplateRequired(self):
        with self.assertRaises(TypeError):
            EnumOptionConfigBuilder(TestEnum, None, DESCRIPTION)
        with self.assertRaises(ValueError):
            EnumOptionConfigBuilder(TestEnum, "", DESCRIPTION)

    def testDescriptionRequired(self):
        with self.assertRaises(TypeError):
            EnumOptionConfigBuilder(TestEnum, TEMPLATE, None)
        with self.assertRaises(ValueError):
            EnumOptionConfigBuilder(TestEnum, TEMPLATE, "   ")

    def testEnumTypeRequired(self):
        with self.assertRaises(TypeError):
            EnumOptionConfigBuilder(int, TEMPLATE, DESCRIPTION)
        with self.assertRaises(TypeError):
            EnumOptionConfigBuilder(TestEnum.abc, TEMPLATE, DESCRIPTION)

    def testEnumExposed(self):
        self.assertIs(EnumOptionConfigBuilder(TestEnum, TEMPLATE, DESCRIPTION).enum, TestEnum)


class TestBuilderSettings(TestCase):
    """Write-once settings of EnumOptionConfigBuilder."""

    def setUp(self):
        self.builder = EnumOptionConfigBuilder(TestEnum, TEMPLATE, DESCRIPTION)

    def testPreventsDoubleConfigure(self):
        actions = (
            lambda: self.builder.allow_multiple(True),
            lambda: self.builder.configuration(lambda option: None),
            lambda: self.builder.describe_arity(True),
            lambda: self.builder.describe_values(True),
            lambda: self.builder.inherited(True),
            lambda: self.builder.throw_on_invalid_option(True),
        )
        for action in actions:
            with self.subTest(action=action):
                action()
                with self.assertRaises(AlreadyConfiguredError):
                    action()

    def testSecondCallFailsEvenWithDifferentValue(self):
        self.builder.inherited(False)
        with self.assertRaises(AlreadyConfiguredError) as context:
            self.builder.inherited(True)
        self.assertEqual(context.exception.options["setting"], "inherited")

    def testFalseCountsAsConfigured(self):
        self.builder.allow_multiple(False)
        with self.assertRaises(AlreadyConfiguredError):
            self.builder.allow_multiple(False)

    def testSettersChain(self):
        self.assertIs(self.builder.allow_multiple(True), self.builder)
        self.assertIs(self.builder.use(TestEnum.abc), self.builder)
        self.assertIs(self.builder.use("xyz", TestEnum.ghi), self.builder)

    def testConfigurationMustBeCallable(self):
        with self.assertRaises(TypeError):
            self.builder.configuration("not callable")
        # A rejected hook does not count as configured.
        self.builder.configuration(lambda option: None)


class TestBuilderRegistration(TestCase):
    """use(...) and use_all() registration forms."""

    def testUseDefaultsToMemberName(self):
        config = EnumOptionConfigBuilder(TestEnum, TEMPLATE, DESCRIPTION).use(TestEnum.abc).build()
        self.assertIs(config.values["abc"], TestEnum.abc)

    def testUseSpecified(self):
        config = (
            EnumOptionConfigBuilder(TestEnum, TEMPLATE, DESCRIPTION)
            .use("xyz", TestEnum.abc)
            .use("opq", TestEnum.abc)
            .build()
        )
        self.assertIs(config.values["opq"], TestEnum.abc)
        self.assertIs(config.values["xyz"], TestEnum.abc)

    def testUseRejectsDuplicateKey(self):
        builder = (
            EnumOptionConfigBuilder(TestEnum, TEMPLATE, DESCRIPTION)
            .use("def_", TestEnum.abc)
            .use("qwerty", TestEnum.abc)
        )
        with self.assertRaises(DuplicateRepresentationError):
            builder.use(TestEnum.def_)
        with self.assertRaises(DuplicateRepresentationError):
            builder.use("QWERTY", TestEnum.def_)

    def testUseRejectsForeignMembers(self):
        builder = EnumOptionConfigBuilder(TestEnum, TEMPLATE, DESCRIPTION)
        with self.assertRaises(TypeError):
            builder.use(Other.abc)
        with self.assertRaises(TypeError):
            builder.use("abc", 1)

    def testUseArity(self):
        builder = EnumOptionConfigBuilder(TestEnum, TEMPLATE, DESCRIPTION)
        with self.assertRaises(TypeError):
            builder.use()
        with self.assertRaises(TypeError):
            builder.use("a", TestEnum.abc, "b")

    def testUseAllUsesAllEnumValues(self):
        config = EnumOptionConfigBuilder(TestEnum, TEMPLATE, DESCRIPTION).use_all().build()
        self.assertEqual(list(config.values), ["abc", "def_", "ghi"])
        self.assertIs(config.values["abc"], TestEnum.abc)
        self.assertIs(config.values["def_"], TestEnum.def_)

    def testUseAllCollisionRegistersNothing(self):
        builder = EnumOptionConfigBuilder(TestEnum, TEMPLATE, DESCRIPTION).use("GHI", TestEnum.abc)
        with self.assertRaises(DuplicateRepresentationError):
            builder.use_all()
        self.assertEqual(list(builder.build().values), ["GHI"])

    def testDefaultIgnoreCase(self):
        config = EnumOptionConfigBuilder(TestEnum, TEMPLATE, DESCRIPTION).use(TestEnum.abc).build()
        self.assertIs(config.values["abc"], TestEnum.abc)
        self.assertIs(config.values["ABC"], TestEnum.abc)
        self.assertIs(config.values["AbC"], TestEnum.abc)

    def testFoldedSpellingsAreDistinct(self):
        config = (
            EnumOptionConfigBuilder(TestEnum, TEMPLATE, DESCRIPTION)
            .use("straße", TestEnum.abc)
            .use("STRASSE", TestEnum.def_)
            .build()
        )
        self.assertIs(config.values["strasse"], TestEnum.def_)
        self.assertIs(config.values["STRAßE"], TestEnum.abc)

    def testUsesComparer(self):
        config = EnumOptionConfigBuilder(TestEnum, TEMPLATE, DESCRIPTION, ordinal).use(TestEnum.abc).build()
        self.assertIn("abc", config.values)
        self.assertNotIn("ABC", config.values)


class TestBuild(TestCase):
    """build() finalization."""

    def testRequiresAtLeastOneUse(self):
        with self.assertRaises(EmptyConfigurationError):
            EnumOptionConfigBuilder(TestEnum, TEMPLATE, DESCRIPTION).build()

    def testSetsDefaultValues(self):
        config = EnumOptionConfigBuilder(TestEnum, TEMPLATE, DESCRIPTION).use(TestEnum.abc).build()

        self.assertEqual(config.template, TEMPLATE)
        self.assertEqual(config.description, DESCRIPTION)
        self.assertTrue(config.allow_multiple)
        self.assertTrue(config.describe_arity)
        self.assertTrue(config.describe_values)
        self.assertFalse(config.inherited)
        self.assertFalse(config.throw_on_invalid_option)
        self.assertIsNone(config.configuration(None))

    def testActuallyConfigures(self):
        marker = []

        config = (
            EnumOptionConfigBuilder(TestEnum, TEMPLATE, DESCRIPTION)
            .allow_multiple(False)
            .configuration(lambda option: marker.append(option))
            .describe_arity(False)
            .describe_values(False)
            .inherited(True)
            .throw_on_invalid_option(True)
            .use(TestEnum.abc)
            .build()
        )

        self.assertFalse(config.allow_multiple)
        self.assertFalse(config.describe_arity)
        self.assertFalse(config.describe_values)
        self.assertTrue(config.inherited)
        self.assertTrue(config.throw_on_invalid_option)

        config.configuration("slot")
        self.assertEqual(marker, ["slot"])

    def testBuilderSealedAfterBuild(self):
        builder = EnumOptionConfigBuilder(TestEnum, TEMPLATE, DESCRIPTION).use(TestEnum.abc)
        builder.build()
        for action in (
            builder.build,
            builder.use_all,
            lambda: builder.use(TestEnum.ghi),
            lambda: builder.inherited(True),
        ):
            with self.subTest(action=action):
                with self.assertRaises(AlreadyConfiguredError):
                    action()

    def testBuiltValuesDetachedFromBuilder(self):
        builder = EnumOptionConfigBuilder(TestEnum, TEMPLATE, DESCRIPTION).use(TestEnum.abc)
        config = builder.build()
        self.assertIsNot(config.values, builder._values)


class TestEnumOptionConfig(TestCase):
    """Direct construction and read-only surface of EnumOptionConfig."""

    def testWrapsPlainMapping(self):
        config = EnumOptionConfig({"abc": TestEnum.abc}, TEMPLATE, DESCRIPTION)
        self.assertIsInstance(config.values, ValueMap)
        self.assertIs(config.values["ABC"], TestEnum.abc)

    def testEmptyValuesRejected(self):
        with self.assertRaises(EmptyConfigurationError):
            EnumOptionConfig({}, TEMPLATE, DESCRIPTION)

    def testValuesMustBeMapping(self):
        with self.assertRaises(TypeError):
            EnumOptionConfig([("abc", TestEnum.abc)], TEMPLATE, DESCRIPTION)

    def testEmptyDescriptionAllowed(self):
        config = EnumOptionConfig({"abc": TestEnum.abc}, TEMPLATE, "")
        self.assertEqual(config.description, "")

    def testDescriptionStillTypeChecked(self):
        with self.assertRaises(TypeError):
            EnumOptionConfig({"abc": TestEnum.abc}, TEMPLATE, None)

    def testBuilderStricterThanDirectConstruction(self):
        EnumOptionConfig({"abc": TestEnum.abc}, TEMPLATE, "")
        with self.assertRaises(ValueError):
            EnumOptionConfigBuilder(TestEnum, TEMPLATE, "")

    def testTemplateValidated(self):
        with self.assertRaises(TypeError):
            EnumOptionConfig({"abc": TestEnum.abc}, 1, DESCRIPTION)
        with self.assertRaises(ValueError):
            EnumOptionConfig({"abc": TestEnum.abc}, " ", DESCRIPTION)

    def testConfigurationMustBeCallable(self):
        with self.assertRaises(TypeError):
            EnumOptionConfig({"abc": TestEnum.abc}, TEMPLATE, DESCRIPTION, configuration=1)

    def testReadOnly(self):
        config = EnumOptionConfig({"abc": TestEnum.abc}, TEMPLATE, DESCRIPTION)
        with self.assertRaises(AttributeError):
            config.template = "-x"  # type: ignore[misc]

    def testRepr(self):
        config = EnumOptionConfig({"abc": TestEnum.abc}, TEMPLATE, DESCRIPTION, inherited=True)
        self.assertTrue(repr(config).startswith("enum-option-config("))
        self.assertIn("inherited=True", repr(config))
        self.assertIn(("template", TEMPLATE), list(config.__rich_repr__()))


if __name__ == "__main__":
    unittest.main()
