#!/usr/bin/env python3
"""
Unit tests for the contract loader.

Run with: python3 -m pytest mocksynth/test_loader.py
   or: python3 mocksynth/test_loader.py
"""

import sys
import os
# Add parent directory to path so the package imports when run as a script
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import json
import tempfile
import unittest
from pathlib import Path

from mocksynth.codegen import MockGenerator, is_nillable
from mocksynth.loader import (
    ContractLoadError,
    ContractLoader,
    Lexer,
    TokenType,
    TypeScope,
    TypeSyntaxError,
    default_package_name,
    load_contracts_from_directory,
    parse_parameter_type,
    parse_type,
)
from mocksynth.model import (
    Array,
    Basic,
    Chan,
    ChanDir,
    Interface,
    Map,
    Named,
    Package,
    Pointer,
    Signature,
    Slice,
    Struct,
    Var,
    error_type,
)


FETCH = Package(path='github.com/acme/fetch', name='fetch')


def token_types(source: str):
    return [t.type for t in Lexer(source).tokenize()]


class TestLexer(unittest.TestCase):
    """Test the type expression lexer."""

    def test_qualified_name_is_one_token(self):
        tokens = Lexer('map[string]*foreign/pkg.Response').tokenize()
        self.assertEqual([t.type for t in tokens], [
            TokenType.MAP,
            TokenType.LBRACKET,
            TokenType.IDENTIFIER,
            TokenType.RBRACKET,
            TokenType.STAR,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ])
        self.assertEqual(tokens[5].value, 'foreign/pkg.Response')

    def test_hyphenated_import_path(self):
        tokens = Lexer('github.com/acme/go-cache.Store').tokenize()
        self.assertEqual(tokens[0].value, 'github.com/acme/go-cache.Store')

    def test_ellipsis(self):
        self.assertEqual(token_types('...int'), [TokenType.ELLIPSIS, TokenType.IDENTIFIER, TokenType.EOF])

    def test_channel_arrows(self):
        self.assertEqual(
            token_types('<-chan int'),
            [TokenType.ARROW, TokenType.CHAN, TokenType.IDENTIFIER, TokenType.EOF],
        )
        self.assertEqual(
            token_types('chan<- int'),
            [TokenType.CHAN, TokenType.ARROW, TokenType.IDENTIFIER, TokenType.EOF],
        )

    def test_newline_ends_a_member(self):
        types = token_types('struct {\n\tA int\n}')
        self.assertEqual(types, [
            TokenType.STRUCT,
            TokenType.LBRACE,
            TokenType.IDENTIFIER,
            TokenType.IDENTIFIER,
            TokenType.SEMICOLON,
            TokenType.RBRACE,
            TokenType.EOF,
        ])

    def test_newline_after_brace_is_not_significant(self):
        self.assertNotIn(TokenType.SEMICOLON, token_types('struct {\n}'))

    def test_struct_tag(self):
        tokens = Lexer('`json:"name"`').tokenize()
        self.assertEqual(tokens[0].type, TokenType.STRING_LITERAL)
        self.assertEqual(tokens[0].value, '`json:"name"`')

    def test_unexpected_character(self):
        with self.assertRaises(TypeSyntaxError) as cm:
            Lexer('map[string]#int').tokenize()
        self.assertEqual(cm.exception.column, 12)

    def test_unterminated_tag(self):
        with self.assertRaises(TypeSyntaxError):
            Lexer('"json').tokenize()


class TestTypeParser(unittest.TestCase):
    """Test parsing of type expressions."""

    def setUp(self):
        self.scope = TypeScope(FETCH)

    def parse(self, text):
        return parse_type(text, self.scope)

    def test_basic(self):
        self.assertEqual(self.parse('string'), Basic('string'))

    def test_predeclared_error(self):
        typ = self.parse('error')
        self.assertEqual(typ, error_type())
        self.assertIsNone(typ.package)

    def test_any_is_empty_interface(self):
        self.assertEqual(self.parse('any'), Interface())

    def test_unqualified_name_belongs_to_own_package(self):
        self.assertEqual(self.parse('Item'), Named('Item', FETCH))

    def test_qualified_name(self):
        typ = self.parse('foreign/pkg.Response')
        self.assertEqual(typ, Named('Response', Package('foreign/pkg', 'pkg')))

    def test_package_name_override(self):
        scope = TypeScope(FETCH, {'github.com/acme/weird': 'strange'})
        typ = parse_type('github.com/acme/weird.Thing', scope)
        self.assertEqual(typ.package.name, 'strange')

    def test_named_nodes_are_shared(self):
        first = self.parse('*foreign/pkg.Response')
        second = self.parse('[]foreign/pkg.Response')
        self.assertIs(first.elem, second.elem)
        self.assertIs(first.elem.package, second.elem.package)

    def test_composites(self):
        self.assertEqual(self.parse('[4]byte'), Array(4, Basic('byte')))
        self.assertEqual(self.parse('map[string][]int'), Map(Basic('string'), Slice(Basic('int'))))
        self.assertEqual(self.parse('**int'), Pointer(Pointer(Basic('int'))))

    def test_channels(self):
        self.assertEqual(self.parse('chan int'), Chan(Basic('int'), ChanDir.SEND_RECV))
        self.assertEqual(self.parse('<-chan int'), Chan(Basic('int'), ChanDir.RECV_ONLY))
        self.assertEqual(self.parse('chan<- int'), Chan(Basic('int'), ChanDir.SEND_ONLY))
        self.assertEqual(
            self.parse('chan (<-chan int)'),
            Chan(Chan(Basic('int'), ChanDir.RECV_ONLY), ChanDir.SEND_RECV),
        )

    def test_signature_with_grouped_names(self):
        typ = self.parse('func(a, b int) error')
        self.assertEqual(typ, Signature(
            params=[Var('a', Basic('int')), Var('b', Basic('int'))],
            results=[Var('', error_type())],
        ))

    def test_signature_unnamed(self):
        typ = self.parse('func(string, *Item)')
        self.assertEqual(typ.params, [Var('', Basic('string')), Var('', Pointer(Named('Item', FETCH)))])
        self.assertEqual(typ.results, [])

    def test_signature_named_results(self):
        typ = self.parse('func() (n int, err error)')
        self.assertEqual(typ.results, [Var('n', Basic('int')), Var('err', error_type())])

    def test_variadic_signature(self):
        typ = self.parse('func(string, ...int)')
        self.assertTrue(typ.variadic)
        self.assertEqual(typ.params[-1].type, Slice(Basic('int')))

    def test_variadic_must_be_last(self):
        with self.assertRaises(TypeSyntaxError):
            self.parse('func(...int, string)')

    def test_mixed_named_and_unnamed(self):
        with self.assertRaises(TypeSyntaxError):
            self.parse('func(a int, string)')

    def test_struct(self):
        typ = self.parse('struct{ Name string `json:"name"`; Next *Node }')
        self.assertIsInstance(typ, Struct)
        self.assertEqual([f.name for f in typ.fields], ['Name', 'Next'])
        self.assertEqual(typ.fields[1].type, Pointer(Named('Node', FETCH)))

    def test_struct_embedded_and_grouped_fields(self):
        typ = self.parse('struct {\n\tforeign/pkg.Base\n\tX, Y int\n}')
        self.assertTrue(typ.fields[0].embedded)
        self.assertEqual(typ.fields[0].name, 'Base')
        self.assertEqual([(f.name, f.type) for f in typ.fields[1:]], [('X', Basic('int')), ('Y', Basic('int'))])

    def test_interface_with_methods(self):
        typ = self.parse('interface{ Close() error\n io.Reader }')
        self.assertFalse(typ.is_empty)
        self.assertEqual([m.name for m in typ.methods], ['Close'])
        self.assertEqual(typ.embedded, [Named('Reader', Package('io', 'io'))])

    def test_embedded_inline_interface_is_flattened(self):
        typ = self.parse('interface{ interface{ Close() } }')
        self.assertEqual([m.name for m in typ.methods], ['Close'])
        self.assertEqual(typ.embedded, [])

    def test_empty_interface(self):
        self.assertTrue(self.parse('interface{}').is_empty)

    def test_syntax_errors(self):
        for text in ['map[string', 'int int', 'foreign/pkg.', '[x]int', 'func(']:
            with self.assertRaises(TypeSyntaxError, msg=text):
                self.parse(text)

    def test_parameter_type(self):
        self.assertEqual(parse_parameter_type('...string', self.scope), (Slice(Basic('string')), True))
        self.assertEqual(parse_parameter_type('[]string', self.scope), (Slice(Basic('string')), False))


class TestDefaultPackageName(unittest.TestCase):
    """Test package name guessing from import paths."""

    def test_names(self):
        self.assertEqual(default_package_name('github.com/acme/fetch'), 'fetch')
        self.assertEqual(default_package_name('github.com/acme/fetch/v2'), 'fetch')
        self.assertEqual(default_package_name('gopkg.in/yaml.v2'), 'yaml')
        self.assertEqual(default_package_name('github.com/acme/go-cache'), 'cache')
        self.assertEqual(default_package_name('io'), 'io')


DESCRIPTION = {
    'package': {'path': 'github.com/acme/fetch'},
    'packages': {'github.com/acme/weird': 'strange'},
    'types': {
        'Handler': 'func(string) error',
        'Alias': 'Handler',
        'Point': 'struct{ X, Y int }',
        'Node': 'struct{ Next *Node }',
    },
    'interfaces': [
        {'name': 'Router', 'methods': [
            {'name': 'Route', 'params': [{'name': 'path', 'type': 'string'}],
             'results': [{'type': 'Handler'}, {'type': 'error'}]},
            {'name': 'Center', 'results': ['Point']},
            {'name': 'Log', 'params': [{'name': 'format', 'type': 'string'},
                                       {'name': 'args', 'type': '...interface{}'}]},
        ]},
        {'name': 'Walker', 'methods': [
            {'name': 'Walk', 'params': ['*Node', 'Alias']},
            {'name': 'Tags', 'variadic': True, 'params': [{'name': 'tags', 'type': '[]string'}]},
        ]},
    ],
}


class TestContractLoader(unittest.TestCase):
    """Test building contracts from JSON descriptions."""

    def load(self, data):
        return ContractLoader().load_data(data)

    def test_contracts_in_declaration_order(self):
        contracts = self.load(DESCRIPTION)
        self.assertEqual([c.name for c in contracts], ['Router', 'Walker'])
        self.assertEqual([m.name for m in contracts[0].methods], ['Route', 'Center', 'Log'])

    def test_package_name_defaults_from_path(self):
        router = self.load(DESCRIPTION)[0]
        self.assertEqual(router.package, FETCH)

    def test_params_and_results(self):
        route = self.load(DESCRIPTION)[0].methods[0]
        self.assertEqual(route.params, [Var('path', Basic('string'))])
        self.assertEqual(route.results[0].type, Named('Handler', FETCH))
        self.assertEqual(route.results[1].type, error_type())
        self.assertFalse(route.variadic)

    def test_plain_string_entries(self):
        walk = self.load(DESCRIPTION)[1].methods[0]
        self.assertEqual([p.name for p in walk.params], ['', ''])

    def test_declared_types_drive_nilability(self):
        router, walker = self.load(DESCRIPTION)
        self.assertTrue(is_nillable(router.methods[0].results[0].type))
        self.assertFalse(is_nillable(router.methods[1].results[0].type))
        self.assertTrue(is_nillable(walker.methods[0].params[1].type))

    def test_recursive_type_definition(self):
        walk = self.load(DESCRIPTION)[1].methods[0]
        node = walk.params[0].type.elem
        self.assertIs(node.underlying.fields[0].type.elem, node)

    def test_dotted_variadic(self):
        log = self.load(DESCRIPTION)[0].methods[2]
        self.assertTrue(log.variadic)
        self.assertEqual(log.params[-1].type, Slice(Interface()))

    def test_flagged_variadic(self):
        tags = self.load(DESCRIPTION)[1].methods[1]
        self.assertTrue(tags.variadic)
        self.assertEqual(tags.params[-1].type, Slice(Basic('string')))

    def test_named_types_are_not_shared_across_descriptions(self):
        loader = ContractLoader()
        first = loader.load_data(DESCRIPTION)[0].methods[0].results[0].type
        second = loader.load_data(DESCRIPTION)[0].methods[0].results[0].type
        self.assertIsNot(first, second)

    def test_variadic_not_last(self):
        data = {'package': {'path': 'x/y'}, 'interfaces': [
            {'name': 'I', 'methods': [{'name': 'M', 'params': ['...int', 'string']}]},
        ]}
        with self.assertRaises(ContractLoadError):
            self.load(data)

    def test_variadic_without_params(self):
        data = {'package': {'path': 'x/y'}, 'interfaces': [
            {'name': 'I', 'methods': [{'name': 'M', 'variadic': True}]},
        ]}
        with self.assertRaises(ContractLoadError):
            self.load(data)

    def test_missing_package(self):
        with self.assertRaises(ContractLoadError):
            self.load({'interfaces': []})

    def test_bad_type_reports_location(self):
        data = {'package': {'path': 'x/y'}, 'interfaces': [
            {'name': 'Fetcher', 'methods': [{'name': 'Get', 'results': ['map[string']}]},
        ]}
        with self.assertRaises(ContractLoadError) as cm:
            self.load(data)
        self.assertIn('Fetcher.Get', str(cm.exception))

    def test_cannot_redefine_predeclared_type(self):
        with self.assertRaises(ContractLoadError):
            self.load({'package': {'path': 'x/y'}, 'types': {'string': 'int'}})

    def test_missing_type(self):
        data = {'package': {'path': 'x/y'}, 'interfaces': [
            {'name': 'I', 'methods': [{'name': 'M', 'params': [{'name': 'a'}]}]},
        ]}
        with self.assertRaises(ContractLoadError):
            self.load(data)

    def test_load_string(self):
        contracts = ContractLoader().load_string(json.dumps(DESCRIPTION))
        self.assertEqual(len(contracts), 2)
        with self.assertRaises(ContractLoadError):
            ContractLoader().load_string('[1, 2')


class TestContractFiles(unittest.TestCase):
    """Test loading descriptions from disk."""

    def test_load_file_errors(self):
        with tempfile.TemporaryDirectory() as tmp:
            broken = Path(tmp) / 'broken.json'
            broken.write_text('{')
            with self.assertRaises(ContractLoadError) as cm:
                ContractLoader().load_file(str(broken))
            self.assertIn('broken.json', str(cm.exception))
            with self.assertRaises(ContractLoadError):
                ContractLoader().load_file(str(Path(tmp) / 'missing.json'))

    def test_load_directory_in_sorted_order(self):
        with tempfile.TemporaryDirectory() as tmp:
            nested = Path(tmp) / 'nested'
            nested.mkdir()
            for directory, name in [(tmp, 'b'), (nested, 'c'), (tmp, 'a')]:
                data = {'package': {'path': f'x/{name}'}, 'interfaces': [{'name': name.upper()}]}
                (Path(directory) / f'{name}.json').write_text(json.dumps(data))
            contracts = load_contracts_from_directory(tmp)
        self.assertEqual([c.name for c in contracts], ['A', 'B', 'C'])


class TestLoadedContractGeneration(unittest.TestCase):
    """Test generating mocks for loaded contracts."""

    def test_declared_func_type_result_is_nil_checked(self):
        router = ContractLoader().load_data(DESCRIPTION)[0]
        output = MockGenerator(router, in_package=True).render()
        self.assertIn('package fetch\n', output)
        self.assertIn('\t\tif ret.Get(0) != nil {\n\t\t\tr0 = ret.Get(0).(Handler)\n', output)
        self.assertIn('\t\tr0 = ret.Get(0).(Point)\n', output)
        self.assertIn('func (_m *MockRouter) Log(format string, args ...interface{}) {', output)


if __name__ == '__main__':
    unittest.main()
