import gzip
import zlib
import unittest

from io import BytesIO

import xnbt

from xnbt.compression import detect, peek, openReader, compress, checkCompression

from test_binary import EXAMPLE_BYTES, example, everything

class Unseekable:
    """Readable stream that can't peek or seek, like a pipe or socket."""
    def __init__( self, data ):
        self._b = BytesIO( data )
    def read( self, n=-1 ):
        return self._b.read( n )

class TestDetect( unittest.TestCase ):
    def test_magic( self ):
        self.assertEqual( detect( b"\x1f\x8b" ), xnbt.COMPRESSION_GZIP )
        self.assertEqual( detect( b"\x78\x9c" ), xnbt.COMPRESSION_ZLIB )
        self.assertEqual( detect( b"\x78\x01" ), xnbt.COMPRESSION_ZLIB )
        self.assertEqual( detect( b"\x78\xda" ), xnbt.COMPRESSION_ZLIB )
        self.assertEqual( detect( b"\x0a\x00" ), xnbt.COMPRESSION_NONE )
        self.assertEqual( detect( b"\x0a" ), xnbt.COMPRESSION_NONE )
        self.assertEqual( detect( b"" ), xnbt.COMPRESSION_NONE )

    def test_real_data( self ):
        self.assertEqual( detect( gzip.compress( EXAMPLE_BYTES ) ), xnbt.COMPRESSION_GZIP )
        for level in range( 10 ):
            self.assertEqual( detect( zlib.compress( EXAMPLE_BYTES, level ) ), xnbt.COMPRESSION_ZLIB )
        self.assertEqual( detect( EXAMPLE_BYTES ), xnbt.COMPRESSION_NONE )

class TestPeek( unittest.TestCase ):
    def test_seekable( self ):
        b = BytesIO( b"abcdef" )
        b.read( 1 )
        head, stream = peek( b, 2 )
        self.assertEqual( head, b"bc" )
        self.assertIs( stream, b )
        self.assertEqual( stream.read(), b"bcdef" )

    def test_unseekable( self ):
        head, stream = peek( Unseekable( b"abcdef" ), 2 )
        self.assertEqual( head, b"ab" )
        self.assertEqual( stream.read( 1 ), b"a" )
        self.assertEqual( stream.read( 3 ), b"bcd" )
        self.assertEqual( stream.read(), b"ef" )

    def test_short( self ):
        head, stream = peek( Unseekable( b"a" ), 2 )
        self.assertEqual( head, b"a" )
        self.assertEqual( stream.read(), b"a" )

class TestFraming( unittest.TestCase ):
    def test_detection_round_trip( self ):
        baseline = xnbt.NBT().fromBytes( EXAMPLE_BYTES )
        self.assertEqual( baseline, example() )
        for compression, data in (
            ( xnbt.COMPRESSION_NONE, EXAMPLE_BYTES ),
            ( xnbt.COMPRESSION_GZIP, gzip.compress( EXAMPLE_BYTES ) ),
            ( xnbt.COMPRESSION_ZLIB, zlib.compress( EXAMPLE_BYTES ) )
        ):
            for stream in ( BytesIO( data ), Unseekable( data ) ):
                detected, readable = openReader( stream )
                self.assertEqual( detected, compression )
                self.assertEqual( readable.read(), EXAMPLE_BYTES )
            self.assertEqual( xnbt.NBT().fromBytes( data ), baseline )
            self.assertEqual( xnbt.NBT().fromStream( Unseekable( data ) ), baseline )

    def test_compress( self ):
        self.assertEqual( compress( EXAMPLE_BYTES, None ), EXAMPLE_BYTES )
        self.assertEqual( gzip.decompress( compress( EXAMPLE_BYTES, "gzip" ) ), EXAMPLE_BYTES )
        self.assertEqual( zlib.decompress( compress( EXAMPLE_BYTES, "zlib" ) ), EXAMPLE_BYTES )
        #gzip output doesn't depend on the time it was written
        self.assertEqual( compress( EXAMPLE_BYTES, "gzip" ), compress( EXAMPLE_BYTES, "gzip" ) )

    def test_unsupported( self ):
        for compression in ( "bz2", "GZIP", "", 0 ):
            with self.assertRaises( xnbt.UnsupportedCompressionError ):
                checkCompression( compression )
        with self.assertRaises( ValueError ):
            compress( EXAMPLE_BYTES, "lzma" )
        with self.assertRaises( xnbt.UnsupportedCompressionError ):
            xnbt.NBT().toBytes( example(), "bz2" )

    def test_corrupt( self ):
        with self.assertRaises( xnbt.StreamError ):
            xnbt.NBT().fromBytes( b"\x1f\x8b\x08\x00\x00\x00\x00\x00\x00\x00garbage!!" )
        with self.assertRaises( xnbt.StreamError ):
            xnbt.NBT().fromBytes( b"\x78\x9cgarbage" )
        #Truncated gzip data
        with self.assertRaises( xnbt.NBTFormatError ):
            xnbt.NBT().fromBytes( gzip.compress( EXAMPLE_BYTES )[:-12] )

    def test_truncated( self ):
        codec = xnbt.NBT()
        for compression in ( xnbt.COMPRESSION_GZIP, xnbt.COMPRESSION_ZLIB ):
            data = codec.toBytes( everything(), compression )
            for stream in ( BytesIO( data[:len( data ) // 2] ), Unseekable( data[:len( data ) // 2] ) ):
                with self.assertRaises( xnbt.UnexpectedEOFError, msg=compression ) as cm:
                    codec.fromStream( stream )
                self.assertIsInstance( cm.exception, EOFError )
                self.assertIsInstance( cm.exception.offset, int )
                self.assertIn( "at byte", str( cm.exception ) )

    def test_truncated_zlib_stream( self ):
        data = zlib.compress( EXAMPLE_BYTES )
        detected, readable = openReader( BytesIO( data[:-4] ) )
        self.assertEqual( detected, xnbt.COMPRESSION_ZLIB )
        self.assertEqual( readable.read( 3 ), EXAMPLE_BYTES[:3] )
        with self.assertRaises( EOFError ):
            readable.read()

    def test_corrupt_offset( self ):
        with self.assertRaises( xnbt.StreamError ) as cm:
            xnbt.NBT().fromBytes( b"\x78\x9cgarbage" )
        self.assertEqual( cm.exception.offset, 0 )

    def test_logging( self ):
        with self.assertLogs( "xnbt.compression", level="DEBUG" ) as cm:
            xnbt.NBT().fromBytes( gzip.compress( EXAMPLE_BYTES ) )
        self.assertTrue( any( "gzip" in line for line in cm.output ) )

if __name__ == "__main__":
    unittest.main()
