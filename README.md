# labnet

Small networking lab tools and a few utilities that go with them: a TCP port
forwarder, simple TCP servers, a TCP file server, a multicast listener, a
multicast file-passing agent, a UDP handshake state machine, a raw Ethernet
frame sniffer and an interface lister, plus a CRC-32 calculator, a 32-bit
LFSR, an anagram finder, an id search over delimited files and matrix
multiplication (plain and Strassen).

Messages printed by the commands are in Spanish.

## Installation

```
pip install .
```

The only runtime dependency is `psutil` (used to list interfaces). To run the
tests:

```
pip install ".[test]"
pytest
```

## Commands

Every command accepts `--help`.

| Command | Arguments | What it does |
| --- | --- | --- |
| `labnet-forwarder` | `addr_listen port_listen addr_dst port_dst` | Listens on `port_listen` and relays every TCP client to `addr_dst:port_dst`, one thread per direction. |
| `labnet-print-server` | `port` | Serves one TCP client at a time and copies what it sends to standard output. |
| `labnet-timeout-server` | `timeout` | Listens on a port chosen by the system (printed at start) and hangs up on a client silent for `timeout` seconds (0: no timeout). |
| `labnet-counter-server` | `port` | Serves each client on its own thread, waits 5 seconds and tells it its number ("Eres el cliente No.: N"). |
| `labnet-fileserver` | `--port` (default 7000) | Reads a file name from a client and sends the file back line by line, ending with "Fin". |
| `labnet-multicast` | `--group` (224.0.1.1), `--port` (5000), `--reply` ("ok") | Joins a multicast group, prints each datagram and answers its sender. |
| `labnet-agent` | `port`, `--role-file` (maestro.dat), `--source` (servidor.c) | Sends or receives a source file over group 224.0.1.1 depending on the role file; see below. |
| `labnet-handshake` | `--port` (1999), `--reply-port` (10156) | Answers single-character UDP datagrams according to a small connection state machine. |
| `labnet-sniffer` | `interface ...` | Opens a raw packet socket per interface in promiscuous mode and prints a summary of each frame. |
| `labnet-interfaces` | `--mac` | Lists the interfaces that are up and not loopback, or with `--mac` their MAC addresses. |
| `labnet-crc32` | `[text]` | Prints the CRC-32 of a text (default "Mensaje de Prueba"). |
| `labnet-lfsr` | `[seed]`, `--limit` | Counts the LFSR steps until the register returns to the seed; asks for the seed when none is given. |
| `labnet-anagram` | `[word ...]` | Prints the anagrams found in a list of words (a built-in list by default). |
| `labnet-idsearch` | `[ids_file] [items_file]`, `--separator` | Counts how many ids from the first field of `ids_file` appear as `|<id>` in `items_file`. |
| `labnet-matrices` | `[dimension]`, `--show`, `--seed`, `--manual` | Times the plain and Strassen products of two random square matrices; `--manual` reads a matrix from the keyboard and prints it. |

Example:

```
labnet-forwarder 0.0.0.0 8080 127.0.0.1 80
```

The forwarder and the TCP servers listen on every IPv4 address; the listen
address given to the forwarder is only shown in its messages. The forwarder's
target must be a dotted IPv4 address.

The sniffer needs Linux raw packet sockets (`AF_PACKET`) and the privileges to
open them. With two or more interfaces it alternates reads between the first
two.

### The agent

`labnet-agent` reads the integer at the start of the role file. With role 1 it
waits 10 seconds, sends the source file to the group (a confirmation datagram,
one datagram per line, then an end marker), deletes the file and flips the
role to 0. With role 0 it receives the file, compiles it with `gcc`, flips the
role and starts the compiled program. Any other role makes it wait and read
the file again.

## Library use

```python
from labnet.crc32 import crc32, hex_bytes
from labnet.anagram import is_anagram, find_anagrams
from labnet.lfsr import Lfsr32, cycle_length
from labnet.matrices import multiply, strassen, format_matrix
from labnet.packets import describe_frame
from labnet.handshake import HandshakeMachine
from labnet.forwarder import Forwarder

checksum = crc32(b"Mensaje de Prueba")
print(hex_bytes(b"\x01\x02"))          # "2 bytes : 01 02 "

print(is_anagram("amor", "roma"))      # True
print(find_anagrams(["amor", "ramo", "casa", "roma"]))

a = [[1.0, 2.0], [3.0, 4.0]]
b = [[5.0, 6.0], [7.0, 8.0]]
print(format_matrix(multiply(a, b)))
print(strassen(a, b))

machine = HandshakeMachine()
print(machine.feed("a"), machine.state)  # "5" State.PASSIVE

with Forwarder("0.0.0.0", 8080, "127.0.0.1", 80) as forwarder:
    forwarder.serve_forever()
```

Other modules:

- `labnet.packets`: `describe_frame(frame)` returns the summary printed for a
  raw Ethernet frame (ARP, IPv4 with ICMP, TCP or UDP, IPv6), and
  `format_mac(raw)` renders six bytes as `AA:BB:CC:DD:EE:FF`. The ether type
  and UDP ports are read in little-endian byte order, so the type numbers
  shown are the wire values with their bytes swapped.
- `labnet.interfaces`: `list_up_interfaces()` returns `InterfaceInfo` records
  (name, addresses, MAC); `mac_address(name)` returns one interface's MAC.
- `labnet.tcputil`: `server_socket`, `accept_connection`, `client_socket` and
  `resolve_host` for IPv4.
- `labnet.servers`: `print_server`, `timeout_server`, `counting_server` and
  `ClientCounter`.
- `labnet.fileserver`: `Pdu` (a header byte and 100-byte message) and
  `serve_file_request(conn)`.
- `labnet.multicast`: `join_group(group, port)` and the generator
  `listen(sock, reply, output)`.
- `labnet.agent`: `AgentPdu`, `send_file`, `receive_file` and `run`.
- `labnet.rolefile`: `read_role`, `toggle_role` and `random_small`.
- `labnet.idsearch`: `read_ids(path, separator)` and `count_found(ids, haystack)`.

Some behaviour worth knowing:

- `is_anagram` only checks that each letter of the first word occurs in the
  second; it does not compare letter counts. Equal words, words of different
  length and words with characters outside `@`..`z` (digits, for instance) are
  never anagrams. `find_anagrams` pairs the words of the first half of the
  list with those after the middle word.
- The LFSR feeds back bits 28, 29, 29 and 31; the repeated tap cancels out.
  `cycle_length(seed, limit)` raises `RuntimeError` when `limit` steps pass
  without the seed coming back.
- `strassen` pads odd sizes with zeros and uses the plain product below size 3.

## What it does not do

- There is no client command for the file server, the handshake responder or
  the counting server; `labnet.tcputil.client_socket` can be used to write one.
- There is no client that downloads a file and reports its MD5 checksum.
- The sniffer only summarises frames; it does not store or filter them.