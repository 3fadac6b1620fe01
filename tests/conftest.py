"""Shared fixtures: a sample tool file and a fake external runner."""

import io
import os
import re

import pytest

from checktool.conventions import Conventions
from checktool.driver import ToolChecker
from checktool.external import ExternalRunner


SAMPLE_TOOL = """\
#!/usr/bin/env perl

# This program is part of the toolkit.

use strict;
use warnings FATAL => 'all';

# ###########################################################################
# OptionParser package
# ###########################################################################
package OptionParser;

sub new {
   my ( $class, %args ) = @_;
   return bless { %args }, $class;
}

sub get {
   my ( $self, $opt ) = @_;
   return $self->{opts}->{$opt};
}

1;
# ###########################################################################
# End OptionParser package
# ###########################################################################

# ###########################################################################
# DSNParser package
# ###########################################################################
package DSNParser;

sub new {
   my ( $class, %args ) = @_;
   return bless { %args }, $class;
}

sub parse_options {
   my ( $self, $o ) = @_;
   return {};
}

1;
# ###########################################################################
# End DSNParser package
# ###########################################################################

# ###########################################################################
# Quoter package
# ###########################################################################
package Quoter;

sub quote {
   my ( @vals ) = @_;
   return join('.', map { "`$_`" } @vals);
}

1;
# ###########################################################################
# End Quoter package
# ###########################################################################

# ###########################################################################
# TableParser package
# ###########################################################################
package TableParser;

sub new {
   my ( $class, %args ) = @_;
   return bless { %args }, $class;
}

1;
# ###########################################################################
# End TableParser package
# ###########################################################################

package pt_sample;

use English qw(-no_match_vars);

sub main {
   local @ARGV = @_;

   my $o = new OptionParser();
   my $dp = new DSNParser();
   my $dsn = $dp->parse_options($o);

   my $tp = new TableParser(Quoter => 'Quoter');
   my $tbl = Quoter::quote('db', 'tbl');

   return 0 if $o->get('dry-run');
   my $where    = $o->get('where');
   my $run_time = $o->get('run-time');
   my $vars     = $o->get('set-vars');
   return 0;
}

if ( !caller ) { exit main(@ARGV); }

1;

__END__

=pod

=head1 NAME

pt-sample - Sample tool for the test suite.

=head1 SYNOPSIS

Usage: pt-sample [OPTIONS] [DSN]

=head1 RISKS

None known.

=head1 DESCRIPTION

pt-sample does nothing useful.

=head1 OPTIONS

=over

=item --ask-pass

Prompt for a password when connecting to MySQL.

=item --charset

short form: -A; type: string

=item --[no]dry-run

Print what would be done and exit.

=item --help

Show help and exit.

=item --host

short form: -h; type: string

=item --password

short form: -p; type: string

=item --port

short form: -P; type: int

=item --run-time

type: time

=item --set-vars

type: Array

=item --socket

short form: -S; type: string

=item --user

short form: -u; type: string

=item --version

Show version and exit.

=item --where

type: string

=back

=head1 DSN OPTIONS

=over

=item * h

Connect to host.

=back

=head1 ENVIRONMENT

None.

=head1 SYSTEM REQUIREMENTS

Perl.

=head1 BUGS

None known.

=head1 DOWNLOADING

From the project site.

=head1 AUTHORS

The toolkit authors.

=head1 ABOUT THE TOOLKIT

A suite of tools.

=head1 COPYRIGHT, LICENSE, AND WARRANTY

Public domain.

=head1 VERSION

pt-sample 1.0.0

=cut
"""

SAMPLE_HELP = """\
pt-sample does nothing useful.  For more details, please use the --help option, or try 'perldoc ./pt-sample' for complete documentation.

Usage: pt-sample [OPTIONS] [DSN]

Options:

  --ask-pass            Prompt for a password when connecting to MySQL
  --charset=s       -A  Default character set
  --[no]dry-run         Print what would be done and exit
  --help                Show help and exit
  --host=s          -h  Connect to host
  --password=s      -p  Password to use when connecting
  --port=i          -P  Port number to use for connection
  --run-time=m          How long to run.  Optional suffix s=seconds,
                        m=minutes, h=hours, d=days
  --set-vars=A          Set the MySQL variables in this comma-separated
                        list of variable=value pairs
  --socket=s        -S  Socket file to use for connection
  --user=s          -u  User for login if not current user
  --version             Show version and exit
  --where=s             WHERE clause

Options and values after processing arguments:

  --ask-pass            FALSE
  --charset             (No value)
  --dry-run             FALSE
  --help                TRUE
"""


class FakeRunner(ExternalRunner):
    """Serves canned program output and emulates grep in Python.

    Args:
        outputs: Output per program, keyed by the program's basename
        programs: Programs reported as installed by :meth:`which`
    """

    def __init__(self, outputs=None, programs=()):
        self.outputs = dict(outputs or {})
        self.programs = set(programs)
        self.calls = []

    def run(self, args):
        args = list(args)
        self.calls.append(args)
        program = os.path.basename(args[0])
        if program == "grep":
            return self._grep(args)
        return self.outputs.get(program, "")

    def which(self, program):
        return f"/usr/bin/{program}" if program in self.programs else None

    def programs_run(self):
        return [os.path.basename(call[0]) for call in self.calls]

    def _grep(self, args):
        pattern = args[args.index("-e") + 1]
        with open(args[-1], encoding="utf-8") as f:
            lines = f.read().split("\n")
        if lines and lines[-1] == "":
            lines.pop()

        if "-F" in args:
            matches = [line for line in lines if pattern in line]
        else:
            matches = [line for line in lines if re.search(pattern, line)]

        if "-c" in args:
            return f"{len(matches)}\n"
        return "".join(f"{line}\n" for line in matches)


@pytest.fixture
def conventions():
    return Conventions.load()


@pytest.fixture
def make_tool(tmp_path):
    """Write a tool file and return its path as a string."""

    def _make_tool(text=SAMPLE_TOOL, name="pt-sample"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _make_tool


@pytest.fixture
def sample_runner():
    return FakeRunner(
        outputs={
            "pt-sample": SAMPLE_HELP,
            "perldoc": "NAME\n    pt-sample - Sample tool for the test suite.\n",
            "podchecker": "pt-sample pod syntax OK.\n",
        },
        programs={"podchecker"},
    )


@pytest.fixture
def run_checks(conventions, sample_runner):
    """Run checks over tool files; return (exit code, stdout text)."""

    def _run_checks(paths, checks=None, runner=None):
        out = io.StringIO()
        checker = ToolChecker(
            conventions,
            runner=runner or sample_runner,
            checks=checks,
            stream=out,
        )
        code = checker.check_files(paths)
        return code, out.getvalue()

    return _run_checks
