"""Unit tests for marker removal across document kinds."""

from ts_expect_errors.config import Settings
from ts_expect_errors.core.removal import strip_markers

_VUE = """\
<template>
  <!-- @vue-expect-error TS2304 --><div v-if="show"><!-- @vue-expect-error TS2339 -->{{ msg }}</div>
  <!-- @vue-expect-error TS2322 -->
  <p>ok</p>
</template>

<script setup lang="ts">
// @ts-expect-error TS2322
const msg: string = 1
</script>
"""

_VUE_STRIPPED = """\
<template>
  <div v-if="show">{{ msg }}</div>
  <p>ok</p>
</template>

<script setup lang="ts">
const msg: string = 1
</script>
"""

_TSX = """\
export function App() {
  // @ts-expect-error TS2322
  const count: number = 'one'
  return (
    <div>
      {/* @ts-expect-error TS2741 */}
      <UserCard name="John" />
    </div>
  )
}
"""


def test_typescript_removes_only_standalone_comments(settings: Settings) -> None:
    source = "  // @ts-expect-error TS2322\n  const a: number = 'x'\nfoo() // @ts-expect-error\n// regular comment\n"
    text, removed = strip_markers(source, "typescript", settings)

    assert text == "  const a: number = 'x'\nfoo() // @ts-expect-error\n// regular comment\n"
    assert removed == 1


def test_typescript_without_markers_is_unchanged(settings: Settings) -> None:
    source = "const a = 1\n"
    assert strip_markers(source, "typescript", settings) == (source, 0)


def test_vue_strips_template_and_script_markers(settings: Settings) -> None:
    text, removed = strip_markers(_VUE, "vue", settings)
    assert text == _VUE_STRIPPED
    assert removed == 4


def test_tsx_strips_line_and_brace_markers(settings: Settings) -> None:
    text, removed = strip_markers(_TSX, "tsx", settings)

    assert "@ts-expect-error" not in text
    assert removed == 2
    assert text.splitlines()[1] == "  const count: number = 'one'"
    assert text.splitlines()[4] == '      <UserCard name="John" />'


def test_custom_directive(settings: Settings) -> None:
    custom = settings.model_copy(update={"ts_directive": "@ts-ignore"})
    text, removed = strip_markers("// @ts-ignore\nx()\n// @ts-expect-error\n", "ts", custom)
    assert text == "x()\n// @ts-expect-error\n"
    assert removed == 1
