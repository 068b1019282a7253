import unittest
from numbers import Number

from adt.diagnostics import ValidationError
from adt.record import *
from adt.tags import is_type
from adt.union import Type
from adt.values import RecordValue

Bool = Type('Bool', [('True', 0), ('False', 0)])

Point = Record('Point', {
    'x': Number,
    'y': Number,
    'visible': Bool,
})

Vector = Record('Vector', {
    'values': [Number],
})


class Base(unittest.TestCase):
    def assert_error(self, msg_contains: str, fn, *args) -> None:
        with self.assertRaises(ValidationError) as cm:
            fn(*args)
        if msg_contains not in str(cm.exception):
            self.fail(f"Actual message does not contain '{msg_contains}': {cm.exception}")

    def point(self, x: object = 1, y: object = 1) -> RecordValue:
        return Point.of({'x': x, 'y': y, 'visible': Bool['True']()})


class TestListSyntax(Base):
    def test_list_of_values(self) -> None:
        self.assert_error('has a property named a that is not', Record, 'Record', {'a': [1, 2, 3]})

    def test_list_of_many_types(self) -> None:
        self.assert_error('has a property named a that is not', Record, 'Record', {'a': [Bool, Number]})

    def test_list_of_one_type(self) -> None:
        Record('Record', {'a': [Bool]})
        Record('Record', {'a': (str,)})

    def test_mismatching_elements(self) -> None:
        self.assert_error('Property "values" expected value of type "[Number]"',
                          Vector.of, {'values': [1, 2, 'a', 4, 5]})

    def test_matching_elements(self) -> None:
        self.assertTrue(Vector.is_(Vector.of({'values': [1, 2, 3, 4, 5]})))
        self.assertTrue(Vector.is_(Vector.of({'values': []})))
        self.assertTrue(Vector.is_(Vector.of({'values': (1.5, 2)})))

    def test_not_a_list(self) -> None:
        self.assert_error('but found value "5" of type "Int"', Vector.of, {'values': 5})

    def test_offending_element(self) -> None:
        Numbers = Record('Numbers', {'values': [Number]})
        with self.assertRaises(ValidationError) as cm:
            Numbers.of({'values': [1, 2, 'a']})
        msg = str(cm.exception)
        self.assertIn('Element 2 ("a") is not of type "Number".', msg)
        self.assertIn('but found value "[1, 2, a]" of type "[Int, Int, Str]".', msg)


class TestRecordCreation(Base):
    def test_no_definition(self) -> None:
        self.assert_error('Record definition must not be None', Record)

    def test_no_name(self) -> None:
        self.assert_error('Record must have a name', Record, None, {'a': bool})

    def test_invalid_name(self) -> None:
        self.assert_error("Record name can't be empty", Record, '', {'a': bool})
        self.assert_error('Record name must be a string', Record, 42, {'a': bool})

    def test_uncapitalized_name(self) -> None:
        self.assert_error('Try Record instead of record', Record, 'record', {'a': bool})

    def test_valid_name(self) -> None:
        self.assertEqual(Record('Record', {'a': bool}).record_name, 'Record')

    def test_no_shape(self) -> None:
        self.assert_error("Record shape for Record can't be None", Record, 'Record')

    def test_empty_shape(self) -> None:
        self.assert_error("Record shape for Record can't be empty", Record, 'Record', {})

    def test_invalid_shape(self) -> None:
        self.assert_error('must be a mapping', Record, 'Record', [('a', int)])

    def test_invalid_field_types(self) -> None:
        self.assert_error('has a property named a that is not', Record, 'Record', {'a': 1234})
        self.assert_error('has an undefined property named a', Record, 'Record', {'a': None})
        self.assert_error('has a property named a that is not', Record, 'Record', {'a': Bool['True']()})

    def test_invalid_field_names(self) -> None:
        self.assert_error('strangely undefined name', Record, 'Record', {None: int})
        self.assert_error('that is not a string', Record, 'Record', {1: int})

    def test_error_shows_signature(self) -> None:
        self.assert_error('record Record {\n    a : 1234\n    b : int\n}',
                          Record, 'Record', {'a': 1234, 'b': int})

    def test_primitive_fields(self) -> None:
        R = Record('Record', {'a': Number, 'b': bool, 'c': str})
        self.assertEqual(list(R.fields), ['a', 'b', 'c'])

    def test_user_defined_fields(self) -> None:
        Record('Record', {'a': Bool})
        Record('Record', {'a': Bool, 'b': Number, 'c': Point})


class TestCreatedRecord(Base):
    def test_is_type(self) -> None:
        self.assertTrue(is_type(Point))
        self.assertEqual(Point.tags.type_name, 'Point')

    def test_is(self) -> None:
        value = self.point()
        self.assertTrue(Point.is_(value))
        self.assertIn(value, Point)
        self.assertFalse(Vector.is_(value))
        self.assertFalse(Point.is_(Bool['True']()))
        self.assertFalse(Point.is_({'x': 1, 'y': 1, 'visible': Bool['True']()}))

    def test_to_string(self) -> None:
        self.assertEqual(str(Point), 'record Point { visible : Bool, x : Number, y : Number }')
        self.assertEqual(str(Vector), 'record Vector { values : [Number] }')

    def test_signature(self) -> None:
        self.assertEqual(Point.signature(), 'record Point {\n    visible : Bool\n    x : Number\n    y : Number\n}')

    def test_immutable(self) -> None:
        with self.assertRaises(AttributeError):
            Point.z = 1  # type: ignore[attr-defined]
        with self.assertRaises(TypeError):
            Point.shape['z'] = int  # type: ignore[index]


class TestValueCreation(Base):
    def test_none(self) -> None:
        self.assert_error("Record value for Point can't be None", Point.of, None)

    def test_not_a_mapping(self) -> None:
        self.assert_error('must be a mapping', Point.of, [1, 1])

    def test_empty(self) -> None:
        self.assert_error("Record value for Point can't be empty", Point.of, {})

    def test_missing_fields(self) -> None:
        self.assert_error('Missing properties:\n\n  - visible\n  - y\n', Point.of, {'x': 1})
        self.assert_error('Missing properties:\n\n  - visible\n  - x\n', Point.of, {'y': 1})

    def test_unexpected_fields(self) -> None:
        value = {'x': 1, 'y': 1, 'visible': Bool['True'](), 'z': 1}
        self.assert_error('Unexpected properties:\n\n  - z\n', Point.of, value)

    def test_same_size_different_fields(self) -> None:
        value = {'x': 1, 'y': 1, 'hidden': Bool['True']()}
        self.assert_error('Unexpected properties:\n\n  - hidden\n', Point.of, value)

    def test_mismatching_types(self) -> None:
        self.assert_error('Property "y" expected value of type "Number"\nbut found value "bad-value" of type "Str".',
                          self.point, 1, 'bad-value')
        self.assert_error('Property "x" expected value of type "Number"', self.point, 'bad-value', 1)
        self.assert_error('Property "x" expected value of type "Number"', self.point, 'bad-value', 'bad-value')

    def test_mismatching_user_type(self) -> None:
        Other = Type('Other', [('Yes', 0)])
        self.assert_error('Property "visible" expected value of type "Bool"\nbut found value "Other.Yes" of type "Other".',
                          Point.of, {'x': 1, 'y': 1, 'visible': Other.Yes()})

    def test_error_shows_value(self) -> None:
        self.assert_error('With values:\n\nrecord value {\n    visible : Bool.True\n    x : 1\n    y : oops\n}',
                          self.point, 1, 'oops')

    def test_matching_types(self) -> None:
        self.assertTrue(Point.is_(self.point()))

    def test_nested_record(self) -> None:
        Line = Record('Line', {'start': Point, 'end': Point})
        line = Line.of({'start': self.point(), 'end': self.point(2, 2)})
        self.assertEqual(str(line), 'Line { end : Point { visible : Bool.True, x : 2, y : 2 }, '
                                    'start : Point { visible : Bool.True, x : 1, y : 1 } }')
        self.assert_error('but found value "{"x":1}" of type "Dict"',
                          Line.of, {'start': self.point(), 'end': {'x': 1}})

    def test_nested_mapping_value(self) -> None:
        R = Record('R', {'m': str})
        self.assert_error('Property "m" expected value of type "str"\nbut found value "{"a":{"[1]":1}}" of type "Dict".',
                          R.of, {'m': {'a': {(1,): 1}}})

    def test_point_scenario(self) -> None:
        P = Record('Point', {'x': Number, 'y': Number})
        self.assert_error('- y', P.of, {'x': 1})
        self.assertEqual(str(P.of({'x': 1, 'y': 2})), 'Point { x : 1, y : 2 }')


class TestCreatedValue(Base):
    def test_type(self) -> None:
        point = self.point()
        self.assertEqual(point.type_name, 'Point')
        self.assertEqual(point.constructor, 'Point')
        self.assertIsInstance(point, RecordValue)

    def test_to_string(self) -> None:
        self.assertEqual(str(self.point()), 'Point { visible : Bool.True, x : 1, y : 1 }')

    def test_payload(self) -> None:
        self.assertEqual(self.point().payload, {'x': 1, 'y': 1, 'visible': Bool['True']()})

    def test_payload_adopted(self) -> None:
        value = {'x': 1, 'y': 1, 'visible': Bool['False']()}
        point = Point.of(value)
        value['x'] = 5
        self.assertEqual(point.payload['x'], 5)

    def test_immutable(self) -> None:
        point = self.point()
        with self.assertRaises(TypeError):
            point.payload['x'] = 2  # type: ignore[index]
        with self.assertRaises(AttributeError):
            point.tags = None  # type: ignore[misc]

    def test_equality(self) -> None:
        self.assertEqual(self.point(), self.point())
        self.assertNotEqual(self.point(), self.point(2))

    def test_unhashable(self) -> None:
        self.assertIsNone(RecordValue.__hash__)
        with self.assertRaises(TypeError):
            hash(self.point())


class TestLenses(Base):
    def test_lenses(self) -> None:
        self.assertEqual(list(Point.lenses), ['x', 'y', 'visible'])
        self.assertIs(Point.lenses.x, Point.lenses['x'])

    def test_view(self) -> None:
        point = self.point()
        self.assertEqual(Point.lenses.x.view(point), 1)
        self.assertEqual(Point.lenses.y.view(point), 1)
        self.assertEqual(Point.lenses.visible.view(point), Bool['True']())

    def test_set(self) -> None:
        point = self.point()
        point2 = Point.lenses.y.set(2, point)
        self.assertEqual(point2, self.point(1, 2))
        self.assertIsInstance(point2, RecordValue)
        self.assertTrue(Point.is_(point2))
        self.assertEqual(Point.lenses.y.view(point), 1)

    def test_over(self) -> None:
        point = self.point()
        self.assertEqual(Point.lenses.y.over(lambda v: v + 1, point), self.point(1, 2))
        self.assertEqual(point, self.point())

    def test_foreign_value(self) -> None:
        self.assert_error('Lens Point.x cannot focus on 1', Point.lenses.x.view, 1)
        vector = Vector.of({'values': [1]})
        self.assert_error('Lens Point.x cannot focus on Vector', Point.lenses.x.view, vector)

    def test_missing_lens(self) -> None:
        with self.assertRaises(AttributeError):
            getattr(Point.lenses, 'z')
        with self.assertRaises(KeyError):
            Point.lenses['z']
