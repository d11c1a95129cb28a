"""Retype a buffer instantly. Closers appear with their openers."""

from retype import BufferSink, NoPause, RecordingSink, parse, replay, retype_buffer

source = "class Greeter\n  def greet(name)\n    puts([name])\n  end\nend\n"

buf = BufferSink(source)
stats = retype_buffer(buf, pause=NoPause())
print(buf.text)
print(stats)

# The first few sink calls show "class" and "end" going in before the body
sink = RecordingSink()
replay(parse(source), sink)
for op in sink.ops[:8]:
    print(op)
