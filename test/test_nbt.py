import os
import gzip
import zlib
import tempfile
import unittest

from io import BytesIO, StringIO
from pathlib import Path

import xnbt

from test_binary import EXAMPLE_BYTES, example, everything, nested

class TestBinary( unittest.TestCase ):
    def test_bytes( self ):
        codec = xnbt.NBT()
        self.assertEqual( codec.toBytes( example() ), EXAMPLE_BYTES )
        self.assertEqual( gzip.decompress( codec.toBytes( example(), "gzip" ) ), EXAMPLE_BYTES )
        self.assertEqual( zlib.decompress( codec.toBytes( example(), "zlib" ) ), EXAMPLE_BYTES )
        for compression in xnbt.COMPRESSIONS:
            doc = codec.fromBytes( codec.toBytes( everything(), compression ) )
            self.assertEqual( doc, everything() )
            self.assertEqual( doc.name, "Example!" )

    def test_file( self ):
        codec = xnbt.NBT()
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join( tmp, "level.dat" )
            codec.toFile( everything(), path, compression="gzip" )
            with open( path, "rb" ) as file:
                self.assertEqual( file.read( 2 ), b"\x1f\x8b" )
            self.assertEqual( codec.fromFile( path ), everything() )

            #Paths can be os.PathLike too
            path = Path( tmp ) / "raw.nbt"
            codec.toFile( example(), path )
            self.assertEqual( path.read_bytes(), EXAMPLE_BYTES )
            self.assertEqual( codec.fromFile( path ), example() )

    def test_missing_file( self ):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises( FileNotFoundError ):
                xnbt.NBT().fromFile( os.path.join( tmp, "missing.dat" ) )

    def test_base64( self ):
        codec = xnbt.NBT()
        text = codec.toBase64( example() )
        self.assertIsInstance( text, str )
        self.assertEqual( text, "CgAAAwABYQAAACoJAARsaXN0AwAAAAMAAAABAAAAAgAAAAMA" )
        self.assertEqual( codec.fromBase64( text ), example() )
        self.assertEqual( codec.fromBase64( codec.toBase64( everything(), "zlib" ) ), everything() )
        with self.assertRaises( xnbt.StreamError ):
            codec.fromBase64( "!!!" )

    def test_stream( self ):
        codec = xnbt.NBT()
        b = BytesIO()
        codec.toStream( example(), b )
        self.assertEqual( b.getvalue(), EXAMPLE_BYTES )
        b.seek( 0 )
        self.assertEqual( codec.fromStream( b ), example() )

    def test_failed_write( self ):
        b = BytesIO()
        doc = example()
        doc["big"] = xnbt.TAG_String( "x" )
        doc.list( "l", [ 1 ], xnbt.TAG_Int )
        list.append( doc["l"], xnbt.TAG_String( "oops" ) )
        with self.assertRaises( xnbt.WrongTagError ):
            xnbt.NBT().toStream( doc, b, "gzip" )
        self.assertEqual( b.getvalue(), b"" )

    def test_depth( self ):
        codec = xnbt.NBT( maxDepth=3 )
        self.assertEqual( codec.fromBytes( codec.toBytes( nested( 3 ) ) ), nested( 3 ) )
        with self.assertRaises( xnbt.NestingTooDeepError ):
            codec.toBytes( nested( 4 ) )
        with self.assertRaises( xnbt.NestingTooDeepError ):
            codec.fromBytes( xnbt.NBT().toBytes( nested( 4 ) ) )

    def test_logging( self ):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join( tmp, "level.dat" )
            with self.assertLogs( "xnbt.nbt", level="DEBUG" ) as cm:
                xnbt.NBT().toFile( example(), path )
                xnbt.NBT().fromFile( path )
        self.assertEqual( len( cm.output ), 2 )
        self.assertTrue( all( path in line for line in cm.output ) )

class TestModuleFunctions( unittest.TestCase ):
    def test_read_write_file( self ):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join( tmp, "level.dat" )
            xnbt.write( everything(), path )
            with open( path, "rb" ) as file:
                self.assertEqual( file.read( 2 ), b"\x1f\x8b" )
            self.assertEqual( xnbt.read( path ), everything() )

            xnbt.write( example(), path, compression=None )
            with open( path, "rb" ) as file:
                self.assertEqual( file.read(), EXAMPLE_BYTES )

    def test_read_write_stream( self ):
        b = BytesIO()
        xnbt.write( example(), b, compression="zlib" )
        self.assertEqual( zlib.decompress( b.getvalue() ), EXAMPLE_BYTES )
        b.seek( 0 )
        self.assertEqual( xnbt.read( b ), example() )

    def test_snbt( self ):
        self.assertEqual( xnbt.toSnbt( example() ), "{a:42,list:[1,2,3]}" )
        self.assertEqual( xnbt.fromSnbt( "{a:42,list:[1,2,3]}" ), example() )
        self.assertEqual( xnbt.fromSnbt( xnbt.toSnbt( everything() ) ), everything() )
        self.assertEqual( xnbt.fromSnbt( xnbt.toSnbt( everything(), pretty=True ) ), everything() )

    def test_codec_config( self ):
        codec = xnbt.NBT( snbtConfig=xnbt.SNBTConfig( quoteKeys=True ) )
        self.assertEqual( codec.toSnbt( example() ), "{\"a\":42,\"list\":[1,2,3]}" )

class TestJson( unittest.TestCase ):
    def test_to_json( self ):
        codec = xnbt.NBT()
        self.assertEqual( codec.toJson( example() ), "{\"a\": 42, \"list\": [1, 2, 3]}" )
        self.assertEqual( codec.toJson( xnbt.NBTDocument() ), "{}" )
        self.assertEqual( codec.toJson( example(), indent=2 ), "{\n  \"a\": 42,\n  \"list\": [\n    1,\n    2,\n    3\n  ]\n}" )

    def test_lossy_types( self ):
        doc = xnbt.NBTDocument()
        doc.byte( "b", 1 )
        doc.long( "l", 2 )
        doc.double( "d", 0.5 )
        doc.string( "s", "é" )
        doc.bytearray( "ba", b"\x01\xff" )
        doc.intarray( "ia", [ 1, -2 ] )
        doc.longarray( "la", [ 3 ] )
        self.assertEqual( xnbt.NBT().toJson( doc ), "{\"b\": 1, \"l\": 2, \"d\": 0.5, \"s\": \"é\", \"ba\": [1, -1], \"ia\": [1, -2], \"la\": [3]}" )

    def test_non_finite( self ):
        doc = xnbt.NBTDocument()
        doc.double( "d", float( "nan" ) )
        with self.assertRaises( xnbt.NBTFormatError ):
            xnbt.NBT().toJson( doc )

    def test_from_json( self ):
        codec = xnbt.NBT()
        tag = codec.fromJson( "{\"a\": 42, \"list\": [1, 2, 3]}" )
        self.assertEqual( tag, example() )
        self.assertEqual( tag["list"].listTagType, xnbt.TAG_INT )

        tag = codec.fromJson( "{\"t\": true, \"f\": false, \"d\": 1.5, \"s\": \"x\", \"big\": 3000000000, \"e\": [], \"c\": {}}" )
        self.assertEqual( tag["t"], xnbt.TAG_Byte( 1 ) )
        self.assertEqual( tag["f"], xnbt.TAG_Byte( 0 ) )
        self.assertEqual( tag["d"], xnbt.TAG_Double( 1.5 ) )
        self.assertEqual( tag["s"], xnbt.TAG_String( "x" ) )
        self.assertEqual( tag["big"], xnbt.TAG_Long( 3000000000 ) )
        self.assertEqual( tag["e"].listTagType, xnbt.TAG_END )
        self.assertEqual( tag["c"], xnbt.TAG_Compound() )
        self.assertEqual( list( tag.keys() ), [ "t", "f", "d", "s", "big", "e", "c" ] )

    def test_widening( self ):
        codec = xnbt.NBT()
        ls = codec.fromJson( "[1, 3000000000]" )
        self.assertEqual( ls.listTagType, xnbt.TAG_LONG )
        self.assertEqual( ls, [ 1, 3000000000 ] )

        ls = codec.fromJson( "[1, 2.5, true]" )
        self.assertEqual( ls.listTagType, xnbt.TAG_DOUBLE )
        self.assertEqual( ls, [ 1.0, 2.5, 1.0 ] )

        with self.assertRaises( xnbt.WrongTagError ):
            codec.fromJson( "[1, \"two\"]" )
        with self.assertRaises( xnbt.WrongTagError ):
            codec.fromJson( "[[1], {}]" )

    def test_unsupported( self ):
        codec = xnbt.NBT()
        with self.assertRaises( xnbt.ConversionError ):
            codec.fromJson( "{\"a\": null}" )
        with self.assertRaises( xnbt.OutOfBoundsError ):
            codec.fromJson( "[1180591620717411303424]" )

    def test_files_and_streams( self ):
        codec = xnbt.NBT()
        s = StringIO()
        codec.toJson( example(), s )
        self.assertEqual( s.getvalue(), "{\"a\": 42, \"list\": [1, 2, 3]}" )
        s.seek( 0 )
        self.assertEqual( codec.fromJson( s ), example() )

        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join( tmp, "doc.json" )
            codec.toJson( example(), path )
            self.assertEqual( codec.fromJson( Path( path ) ), example() )

    def test_depth( self ):
        codec = xnbt.NBT( maxDepth=2 )
        codec.toJson( nested( 2 ) )
        with self.assertRaises( xnbt.NestingTooDeepError ):
            codec.toJson( nested( 3 ) )
        codec.fromJson( "{\"c\": {\"c\": {}}}" )
        with self.assertRaises( xnbt.NestingTooDeepError ):
            codec.fromJson( "{\"c\": {\"c\": {\"c\": {}}}}" )

if __name__ == "__main__":
    unittest.main()
