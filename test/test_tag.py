import unittest

import xnbt

class TestPrimitives( unittest.TestCase ):
    def test_ranges( self ):
        for cls, vmin, vmax in (
            ( xnbt.TAG_Byte,                 -128,                 127 ),
            ( xnbt.TAG_Short,              -32768,               32767 ),
            ( xnbt.TAG_Int,           -2147483648,          2147483647 ),
            ( xnbt.TAG_Long, -9223372036854775808, 9223372036854775807 )
        ):
            self.assertEqual( cls( vmin ), vmin )
            self.assertEqual( cls( vmax ), vmax )
            with self.assertRaises( xnbt.OutOfBoundsError ):
                cls( vmin - 1 )
            with self.assertRaises( xnbt.OutOfBoundsError ):
                cls( vmax + 1 )

    def test_equality( self ):
        self.assertEqual( xnbt.TAG_Int( 1 ), 1 )
        self.assertEqual( xnbt.TAG_Int( 1 ), xnbt.TAG_Int( 1 ) )
        self.assertNotEqual( xnbt.TAG_Int( 1 ), xnbt.TAG_Long( 1 ) )
        self.assertNotEqual( xnbt.TAG_Float( 1.0 ), xnbt.TAG_Double( 1.0 ) )
        self.assertNotEqual( xnbt.TAG_String( "a" ), xnbt.TAG_Byte_Array( b"a" ) )
        self.assertEqual( xnbt.TAG_String( "a" ), "a" )

    def test_float_rounding( self ):
        f = xnbt.TAG_Float( 0.1 )
        self.assertNotEqual( f, 0.1 )
        self.assertAlmostEqual( f, 0.1, places=6 )
        self.assertEqual( xnbt.TAG_Float( f ), f )
        self.assertEqual( xnbt.TAG_Float( 1e39 ), float( "inf" ) )

    def test_string_length( self ):
        xnbt.TAG_String( "a" * 65535 )
        with self.assertRaises( xnbt.OutOfBoundsError ):
            xnbt.TAG_String( "a" * 65536 )
        #2 bytes per character when UTF-8 encoded
        with self.assertRaises( xnbt.OutOfBoundsError ):
            xnbt.TAG_String( "é" * 40000 )

    def test_repr( self ):
        self.assertEqual( repr( xnbt.TAG_Int( 5 ) ), "TAG_Int(5)" )
        self.assertEqual( repr( xnbt.TAG_String( "x" ) ), "TAG_String('x')" )
        self.assertEqual( repr( xnbt.TAG_Int_Array( [ 1, 2 ] ) ), "TAG_Int_Array([1, 2])" )
        self.assertEqual( repr( xnbt.TAG_Long_Array() ), "TAG_Long_Array()" )
        self.assertEqual( repr( xnbt.TAG_List() ), "TAG_List()" )
        self.assertEqual( repr( xnbt.TAG_Byte_Array( b"\x01\xff" ) ), "TAG_Byte_Array(b'\\x01\\xff')" )
        self.assertEqual( repr( xnbt.TAG_Byte_Array() ), "TAG_Byte_Array()" )

    def test_flags( self ):
        flags = ( "isByte", "isShort", "isInt", "isLong", "isFloat", "isDouble", "isByteArray", "isString", "isList", "isCompound", "isIntArray", "isLongArray" )
        tags = (
            xnbt.TAG_Byte( 1 ), xnbt.TAG_Short( 1 ), xnbt.TAG_Int( 1 ), xnbt.TAG_Long( 1 ), xnbt.TAG_Float( 1 ), xnbt.TAG_Double( 1 ),
            xnbt.TAG_Byte_Array(), xnbt.TAG_String(), xnbt.TAG_List(), xnbt.TAG_Compound(), xnbt.TAG_Int_Array(), xnbt.TAG_Long_Array()
        )
        #Exactly one per-kind flag is set on each tag
        for flag, tag in zip( flags, tags ):
            for other in flags:
                self.assertIs( getattr( tag, other ), other == flag, "{}.{}".format( tag.__class__.__name__, other ) )

        for tag in tags:
            t = tag.tagType
            self.assertEqual( tag.isIntegral, t in ( xnbt.TAG_BYTE, xnbt.TAG_SHORT, xnbt.TAG_INT, xnbt.TAG_LONG ) )
            self.assertEqual( tag.isReal,     t in ( xnbt.TAG_FLOAT, xnbt.TAG_DOUBLE ) )
            self.assertEqual( tag.isNumeric,  tag.isIntegral or tag.isReal )
            self.assertEqual( tag.isArray,    t in ( xnbt.TAG_BYTE_ARRAY, xnbt.TAG_INT_ARRAY, xnbt.TAG_LONG_ARRAY ) )
            self.assertEqual( tag.isSequence, tag.isArray or t in ( xnbt.TAG_STRING, xnbt.TAG_LIST ) )
        self.assertTrue( xnbt.NBTDocument().isCompound )

    def test_tagClass( self ):
        self.assertIs( xnbt.tagClass( xnbt.TAG_INT ), xnbt.TAG_Int )
        self.assertIs( xnbt.tagClass( xnbt.TAG_LONG_ARRAY ), xnbt.TAG_Long_Array )
        self.assertIsNone( xnbt.tagClass( xnbt.TAG_END ) )

class TestList( unittest.TestCase ):
    def test_empty( self ):
        ls = xnbt.TAG_List()
        self.assertEqual( ls.listTagType, xnbt.TAG_END )
        self.assertEqual( xnbt.TAG_List( listTagType=xnbt.TAG_Int ).listTagType, xnbt.TAG_INT )
        self.assertEqual( xnbt.TAG_List( listTagType=xnbt.TAG_INT ).listTagType, xnbt.TAG_INT )
        #Empty lists are equal whatever their declared type
        self.assertEqual( xnbt.TAG_List( listTagType=xnbt.TAG_INT ), xnbt.TAG_List() )

    def test_deduce( self ):
        ls = xnbt.TAG_List( ( "Check", "out", "these", "strings!" ) )
        self.assertEqual( ls.listTagType, xnbt.TAG_STRING )
        self.assertTrue( all( isinstance( s, xnbt.TAG_String ) for s in ls ) )

        ls = xnbt.TAG_List( range( 10 ), xnbt.TAG_Int )
        self.assertEqual( ls, list( range( 10 ) ) )
        self.assertTrue( all( s.tagType == xnbt.TAG_INT for s in ls ) )

        #int could be any of several tag types
        with self.assertRaises( xnbt.ConversionError ):
            xnbt.TAG_List( ( 1, 2 ) )

    def test_wrong_type( self ):
        ls = xnbt.TAG_List( ( 1, 2, 3 ), xnbt.TAG_Int )
        with self.assertRaises( xnbt.WrongTagError ):
            ls.append( "four" )
        with self.assertRaises( xnbt.WrongTagError ):
            ls.append( xnbt.TAG_String( "four" ) )
        with self.assertRaises( xnbt.WrongTagError ):
            ls.append( xnbt.TAG_Long( 4 ) )
        with self.assertRaises( xnbt.WrongTagError ):
            ls.string( "four" )
        with self.assertRaises( xnbt.WrongTagError ):
            ls[0] = "zero"
        self.assertEqual( ls, [ 1, 2, 3 ] )

        ls.append( 4 )
        ls.int( 5 )
        ls.insert( 0, 0 )
        self.assertEqual( ls, [ 0, 1, 2, 3, 4, 5 ] )

    def test_type_is_fixed( self ):
        ls = xnbt.TAG_List( ( "a", ) )
        ls.clear()
        with self.assertRaises( xnbt.WrongTagError ):
            ls.append( xnbt.TAG_Int( 1 ) )
        self.assertEqual( ls.listTagType, xnbt.TAG_STRING )

    def test_failed_extend( self ):
        ls = xnbt.TAG_List()
        with self.assertRaises( xnbt.WrongTagError ):
            ls.extend( [ "a", xnbt.TAG_Int( 1 ) ] )
        self.assertEqual( len( ls ), 0 )
        self.assertEqual( ls.listTagType, xnbt.TAG_END )

    def test_copy( self ):
        ls = xnbt.TAG_List( listTagType=xnbt.TAG_Short )
        c = ls.copy()
        self.assertIsInstance( c, xnbt.TAG_List )
        self.assertEqual( c.listTagType, xnbt.TAG_SHORT )

class TestCompound( unittest.TestCase ):
    def test_overwrite_keeps_position( self ):
        c = xnbt.TAG_Compound()
        c.int( "a", 1 )
        c.int( "b", 2 )
        c["a"] = 3
        self.assertEqual( list( c.keys() ), [ "a", "b" ] )
        self.assertEqual( c["a"], xnbt.TAG_Int( 3 ) )
        self.assertEqual( c["a"].tagType, xnbt.TAG_INT )

    def test_conversions( self ):
        c = xnbt.TAG_Compound()
        c["s"] = "text"
        c["b"] = True
        c["ba"] = b"\x01\x02"
        c["l"] = [ "x", "y" ]
        c["c"] = { "n": xnbt.TAG_Short( 1 ) }
        self.assertEqual( c["s"].tagType, xnbt.TAG_STRING )
        self.assertEqual( c["b"], xnbt.TAG_Byte( 1 ) )
        self.assertEqual( c["ba"].tagType, xnbt.TAG_BYTE_ARRAY )
        self.assertEqual( c["l"].listTagType, xnbt.TAG_STRING )
        self.assertEqual( c["c"]["n"].tagType, xnbt.TAG_SHORT )

        with self.assertRaises( xnbt.ConversionError ):
            c["new"] = 5

        #Numbers are converted to the type of the tag they replace
        c["c"]["n"] = 7
        self.assertEqual( c["c"]["n"], xnbt.TAG_Short( 7 ) )
        with self.assertRaises( xnbt.OutOfBoundsError ):
            c["c"]["n"] = 70000

    def test_bad_key( self ):
        c = xnbt.TAG_Compound()
        with self.assertRaises( TypeError ):
            c[1] = "x"

    def test_equality_is_ordered( self ):
        a = xnbt.TAG_Compound( [ ( "x", xnbt.TAG_Int( 1 ) ), ( "y", xnbt.TAG_Int( 2 ) ) ] )
        b = xnbt.TAG_Compound( [ ( "y", xnbt.TAG_Int( 2 ) ), ( "x", xnbt.TAG_Int( 1 ) ) ] )
        self.assertNotEqual( a, b )
        self.assertEqual( a, a.copy() )

class TestNBTDocument( unittest.TestCase ):
    def test_init( self ):
        self.assertEqual( xnbt.NBTDocument().name, "" )
        self.assertEqual( xnbt.NBTDocument( "root" ).name, "root" )
        doc = xnbt.NBTDocument( "root", { "a": "b" } )
        self.assertEqual( doc.name, "root" )
        self.assertEqual( doc["a"], "b" )
        self.assertEqual( doc.tagType, xnbt.TAG_COMPOUND )

    def test_equality( self ):
        self.assertEqual( xnbt.NBTDocument(), xnbt.TAG_Compound() )
        self.assertEqual( xnbt.NBTDocument( "a" ), xnbt.NBTDocument( "a" ) )
        self.assertNotEqual( xnbt.NBTDocument( "a" ), xnbt.NBTDocument( "b" ) )

    def test_copy( self ):
        doc = xnbt.NBTDocument( "root", { "a": "b" } )
        c = doc.copy()
        self.assertIsInstance( c, xnbt.NBTDocument )
        self.assertEqual( c, doc )

if __name__ == "__main__":
    unittest.main()
