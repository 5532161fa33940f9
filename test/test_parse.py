import unittest

import jsnbt

from jsnbt import (
    TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double, TAG_String,
    TAG_List, TAG_Compound, TAG_Byte_Array, TAG_Int_Array, TAG_Long_Array,
    parse, parseValue, ParsingError, TrailingDataError
)

example = """
{
    byte: -3b,
    short: -500s,
    int: -1234567,
    long: -12345678910111213L,
    float: 52.35f,
    double: 123.456789101112,
    string: "This is a string!",
    'single quoted': 'It\\'s here',
    compound: { name: Jeff, id: 5 },
    list: [ "Hey!", Check, out, these, "strings!" ],
    list2: [ 10.2f, 15.6f ],
    bytearray: [B; 0b, 1b, 2B],
    intarray: [I; 5, 6, 7, 8],
    longarray: [L; 9l, 10l],
    flag: true,
}
"""

class TestParse( unittest.TestCase ):
    def test_example( self ):
        doc = parse( example )
        self.assertIsInstance( doc, TAG_Compound )
        self.assertEqual( list( doc ), [
            "byte", "short", "int", "long", "float", "double", "string", "single quoted",
            "compound", "list", "list2", "bytearray", "intarray", "longarray", "flag"
        ] )
        for key, c, value in (
            ( "byte",          TAG_Byte,   -3 ),
            ( "short",         TAG_Short,  -500 ),
            ( "int",           TAG_Int,    -1234567 ),
            ( "long",          TAG_Long,   -12345678910111213 ),
            ( "float",         TAG_Float,  52.35 ),
            ( "double",        TAG_Double, 123.456789101112 ),
            ( "string",        TAG_String, "This is a string!" ),
            ( "single quoted", TAG_String, "It's here" ),
            ( "flag",          TAG_Byte,   1 )
        ):
            with self.subTest( key=key ):
                self.assertIs( doc[key].__class__, c )
                self.assertEqual( doc[key], value )

        self.assertEqual( doc["compound"]["name"], "Jeff" )
        self.assertIsInstance( doc["compound"]["id"], TAG_Int )
        self.assertEqual( doc["list"], [ "Hey!", "Check", "out", "these", "strings!" ] )
        self.assertEqual( doc["list"].listTagType, jsnbt.TAG_STRING )
        self.assertEqual( doc["list2"].listTagType, jsnbt.TAG_FLOAT )
        self.assertIsInstance( doc["bytearray"], TAG_Byte_Array )
        self.assertEqual( doc["bytearray"], [ 0, 1, 2 ] )
        self.assertIsInstance( doc["intarray"], TAG_Int_Array )
        self.assertIsInstance( doc["longarray"], TAG_Long_Array )
        self.assertIsInstance( doc["longarray"][1], TAG_Long )

    def test_empty( self ):
        self.assertEqual( parse( "{}" ), {} )
        self.assertEqual( parse( "  { }  " ), {} )
        doc = parse( "{a:[],b:[ ],c:{},d:[I;]}" )
        self.assertIsInstance( doc["a"], TAG_List )
        self.assertEqual( len( doc["b"] ), 0 )
        self.assertIsInstance( doc["c"], TAG_Compound )
        self.assertIsInstance( doc["d"], TAG_Int_Array )
        self.assertEqual( len( doc["d"] ), 0 )

    def test_trailing_commas( self ):
        self.assertEqual( parse( "{a:1,}" ), { "a": 1 } )
        self.assertEqual( parse( "{a:[1,2,]}" )["a"], [ 1, 2 ] )
        self.assertEqual( parse( "{a:[I;1,]}" )["a"], [ 1 ] )

    def test_keys( self ):
        doc = parse( "{\"a b\":1,'c\"d':2,\"\":3,5:4,true:5}" )
        self.assertEqual( list( doc ), [ "a b", "c\"d", "", "5", "true" ] )
        self.assertIsInstance( doc["true"], TAG_Int )

    def test_strings( self ):
        doc = parse( "{a:\"say \\\"hi\\\" \\\\o/\",b:'a\"b',c:\"it's\",d:\"\",e:\"5\",f:minecraft.stone}" )
        self.assertEqual( doc["a"], "say \"hi\" \\o/" )
        self.assertEqual( doc["b"], "a\"b" )
        self.assertEqual( doc["c"], "it's" )
        self.assertEqual( doc["d"], "" )
        self.assertIsInstance( doc["e"], TAG_String )
        self.assertTrue( doc["e"].needsQuotes )
        self.assertEqual( doc["f"], "minecraft.stone" )
        self.assertFalse( doc["f"].isKey )

    def test_string_fallback( self ):
        doc = parse( "{a:300b,b:9223372036854775808L,c:1e5,d:00}" )
        for key in ( "a", "b", "c", "d" ):
            self.assertIsInstance( doc[key], TAG_String )

        self.assertEqual( doc["a"], "300b" )
        self.assertIsInstance( doc["a"].limitError, jsnbt.OutOfBoundsError )
        self.assertTrue( doc["a"].limitError.tooHigh )
        self.assertIsInstance( doc["b"].limitError, jsnbt.OutOfBoundsError )
        self.assertIsNone( doc["c"].limitError )

    def test_huge_literals( self ):
        #Too many digits to convert to an int; still read as strings
        for text, tooHigh in (
            ( "1" * 5000,             True  ),
            ( "1" * 5000 + "l",       True  ),
            ( "-" + "1" * 5000 + "L", False ),
            ( "-" + "1" * 5000 + "b", False ),
            ( "+" + "9" * 5000 + "s", True  )
        ):
            with self.subTest( length=len( text ), suffix=text[-1] ):
                doc = parse( "{a:" + text + "}" )
                self.assertIsInstance( doc["a"], TAG_String )
                self.assertEqual( doc["a"], text )
                e = doc["a"].limitError
                self.assertIsInstance( e, jsnbt.OutOfBoundsError )
                self.assertEqual( e.value, text[:-1] if text[-1] in "lLbs" else text )
                self.assertEqual( e.tooHigh, tooHigh )
                self.assertIn( "(5001 characters)" if text[0] in "+-" else "(5000 characters)", str( e ) )

        #Reals of any length are fine; they're clamped
        self.assertEqual( parseValue( "1" * 5000 + ".0" ), float( "inf" ) )

    def test_list_or_array( self ):
        #A "[X;" prefix makes a typed array; anything else is a list
        self.assertIsInstance( parseValue( "[I]" ), TAG_List )
        self.assertEqual( parseValue( "[I]" )[0], "I" )
        l = parseValue( "[\"I;\"]" )
        self.assertNotIsInstance( l, TAG_Int_Array )
        self.assertEqual( l[0], "I;" )

    def test_nested( self ):
        doc = parse( "{a:[{b:[[1b],[]]},{}],c:{d:{e:[L;1l]}}}" )
        self.assertEqual( doc["a"].listTagType, jsnbt.TAG_COMPOUND )
        self.assertIsInstance( doc["a"][0]["b"][0][0], TAG_Byte )
        self.assertEqual( doc.rget( "c", "d", "e", 0 ), 1 )

class TestParseValue( unittest.TestCase ):
    def test_typed_array( self ):
        a = parseValue( "[I;1,2,3]" )
        self.assertIsInstance( a, TAG_Int_Array )
        self.assertEqual( len( a ), 3 )
        self.assertTrue( all( t.__class__ is TAG_Int for t in a ) )
        self.assertEqual( a, [ 1, 2, 3 ] )

    def test_primitives( self ):
        self.assertIs( parseValue( " 5s " ).__class__, TAG_Short )
        self.assertIs( parseValue( "hello" ).__class__, TAG_String )
        self.assertEqual( parseValue( "'x'" ), "x" )
        self.assertEqual( parseValue( "false" ), 0 )

class TestParseErrors( unittest.TestCase ):
    def assertParseError( self, text, message, fn=parse ):
        with self.assertRaises( ParsingError ) as cm:
            fn( text )
        self.assertEqual( cm.exception.message, message )
        return cm.exception

    def test_duplicate_key( self ):
        e = self.assertParseError( "{a:1,a:2}", "Duplicate key" )
        self.assertEqual( e.position, 6 )
        self.assertEqual( e.context, "{a:1,a" )
        self.assertIsInstance( e.__cause__, jsnbt.DuplicateNameError )
        self.assertEqual( str( e ), "Duplicate key at: {a:1,a<--[HERE]" )

    def test_list_type_mismatch( self ):
        e = self.assertParseError( "[1,\"x\"]", "Unable to insert TAG_String into TAG_List of type TAG_Int", parseValue )
        self.assertIsInstance( e.__cause__, jsnbt.WrongTagError )
        self.assertEqual( e.__cause__.expected, jsnbt.TAG_INT )
        self.assertEqual( e.__cause__.given, jsnbt.TAG_STRING )

        self.assertParseError( "{l:[1,\"x\"]}", "Unable to insert TAG_String into TAG_List of type TAG_Int" )
        self.assertParseError( "{l:[[],{}]}", "Unable to insert TAG_Compound into TAG_List of type TAG_List" )

    def test_array_errors( self ):
        e = self.assertParseError( "[I;1,2b]", "Unable to insert TAG_Byte into TAG_Int_Array", parseValue )
        self.assertIsInstance( e.__cause__, jsnbt.WrongTagError )
        e = self.assertParseError( "[X;1]", "Invalid array type 'X' found", parseValue )
        self.assertEqual( e.suggestion, "Use B, I or L" )
        self.assertParseError( "[I;", "Expected a value", parseValue )
        self.assertParseError( "[I;1,", "Expected a value", parseValue )
        self.assertParseError( "[I;1 2]", "Expected ']' but got '2'", parseValue )

    def test_structure( self ):
        self.assertParseError( "[1]", "Expected '{' but got '['" )
        self.assertParseError( "", "Expected '{' but got '<EOF>'" )
        self.assertParseError( "{a:1", "Expected '}' but got '<EOF>'" )
        self.assertParseError( "{a:1,", "Expected a key" )
        self.assertParseError( "{a 1}", "Expected ':' but got '1'" )
        self.assertParseError( "{:1}", "Expected non-empty key" )
        self.assertParseError( "{a:}", "Expected a value" )
        self.assertParseError( "{a:", "Expected a value" )
        self.assertParseError( "{a:1 b:2}", "Expected '}' but got 'b'" )
        self.assertParseError( "[1,", "Expected a value", parseValue )
        self.assertParseError( "[", "Expected a value", parseValue )

    def test_quoted_strings( self ):
        self.assertParseError( "{a:\"\\n\"}", "Invalid escape of n" )
        self.assertParseError( "{a:'\\\"'}", "Invalid escape of \"" )
        self.assertParseError( "{a:\"abc}", "Missing termination quote" )

    def test_trailing_data( self ):
        with self.assertRaises( TrailingDataError ) as cm:
            parse( "{a:1} x" )
        self.assertEqual( cm.exception.message, "Trailing data found" )
        self.assertEqual( cm.exception.context, "{a:1} x" )
        with self.assertRaises( TrailingDataError ):
            parseValue( "1 2" )
        #Surrounding whitespace is fine
        self.assertEqual( parse( "\n\t{a:1}\n" ), { "a": 1 } )

    def test_context( self ):
        e = self.assertParseError( "{\na:1,\nb}", "Expected ':' but got '}'" )
        self.assertEqual( e.context, "{\u21B5a:1,\u21B5b}" )
        self.assertEqual( str( e ), "Expected ':' but got '}' at: {\u21B5a:1,\u21B5b}<--[HERE]" )

        text = "{" + "a" * 50 + " 1}"
        e = self.assertParseError( text, "Expected ':' but got '1'" )
        self.assertEqual( e.position, 53 )
        self.assertEqual( e.context, "..." + text[18:53] )
        self.assertEqual( len( e.context ), 38 )

if __name__ == "__main__":
    unittest.main()
