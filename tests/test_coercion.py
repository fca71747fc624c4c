import unittest
from gsheetsLib.coercion import to_strings, to_loose, from_wire, to_wire
from gsheetsLib.models import CellValue

class TestCoercion(unittest.TestCase):

    # --- Display text of each kind ---
    def test_text_and_empty(self):
        self.assertEqual(str(CellValue.text('abc')), 'abc')
        self.assertEqual(str(CellValue.text('')), '')
        self.assertEqual(str(CellValue.empty()), '')

    def test_booleans(self):
        self.assertEqual(str(CellValue.boolean(True)), 'TRUE')
        self.assertEqual(str(CellValue.boolean(False)), 'FALSE')

    def test_boolean_matches_formatted_render(self):
        # FORMATTED_VALUE sends the text 'TRUE', UNFORMATTED_VALUE sends a JSON true.
        self.assertEqual(to_strings(from_wire([['TRUE', True, 'FALSE', False]])),
                         [['TRUE', 'TRUE', 'FALSE', 'FALSE']])

    def test_numbers(self):
        self.assertEqual(str(CellValue.number(42)), '42')
        self.assertEqual(str(CellValue.number(-7)), '-7')
        self.assertEqual(str(CellValue.number(3.0)), '3')
        self.assertEqual(str(CellValue.number(1.5)), '1.5')
        self.assertEqual(str(CellValue.number(0.1)), '0.1')
        self.assertEqual(str(CellValue.number(123456789.0)), '123456789')
        self.assertEqual(str(CellValue.number(12345678901234567890)), '12345678901234567890')
        self.assertEqual(str(CellValue.number(1e16)), '1e+16')
        self.assertEqual(str(CellValue.number(0.00001)), '1e-05')

    # --- Wire tagging ---
    def test_from_wire_tags(self):
        row = from_wire([['a', 1, 2.5, True, None]])[0]
        self.assertEqual([cell.kind for cell in row], ['text', 'number', 'number', 'bool', 'empty'])
        self.assertEqual(row[3].value, True)

    def test_to_wire_unwraps(self):
        values = [[CellValue.text('a'), CellValue.number(1), CellValue.boolean(False), CellValue.empty()]]
        self.assertEqual(to_wire(values), [['a', 1, False, None]])

    # --- Matrix conversions ---
    def test_to_strings_keeps_shape(self):
        jagged = from_wire([[1, 'b', True], [], [None], [2.0, 'x']])
        result = to_strings(jagged)
        self.assertEqual(len(result), 4)
        self.assertEqual([len(row) for row in result], [3, 0, 1, 2])
        self.assertEqual(result, [['1', 'b', 'TRUE'], [], [''], ['2', 'x']])

    def test_to_strings_empty(self):
        self.assertEqual(to_strings([]), [])

    def test_to_loose_never_infers(self):
        loose = to_loose([['42', 'TRUE', '']])
        self.assertTrue(all(cell.kind == 'text' for cell in loose[0]))
        self.assertEqual(to_wire(loose), [['42', 'TRUE', '']])

    def test_text_round_trip(self):
        strings = [['1', '2.50', 'FALSE'], ['', ' a '], []]
        self.assertEqual(to_strings(to_loose(strings)), strings)

    def test_loose_round_trip_is_not_identity(self):
        original = [[CellValue.number(42)]]
        self.assertNotEqual(to_loose(to_strings(original)), original)

if __name__ == '__main__':
    unittest.main()
